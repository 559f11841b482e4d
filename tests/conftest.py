"""
Shared test configuration and fixtures for key provisioning tests.

Key generation is comparatively slow, so keypairs used as fixtures are generated once per
test session.
"""

import pytest

from social.graze.login.keys.generator import generate_key_material
from social.graze.login.keys.model import KeyMaterial, SigningOptions

from tests.test_helpers import MemoryFileSystem


SETTINGS_ENVIRONMENT = (
    "NODE_ENV",
    "ENVIRONMENT",
    "PORT",
    "BASE_URL",
    "TITLE",
    "SESSION_SECRET",
    "ALLOWED_ORIGINS",
    "SENTRY_DSN",
    "MONGO_USER",
    "MONGO_PASS",
    "MONGO_HOST",
    "MONGO_PORT",
    "MONGO_DB",
    "RATE_LIMIT_WINDOW",
    "RATE_LIMIT_MAX",
    "JWT_PRIVATE_KEY_PATH",
    "JWT_PUBLIC_KEY_PATH",
    "JTW_PRIVATE_KEY_PATH",
    "JTW_PUBLIC_KEY_PATH",
    "JWT_ALGORITHM",
    "JWT_EXPIRES_IN",
    "JWT_KEY_SIZE",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove settings variables from the environment and run in an empty directory."""
    for name in SETTINGS_ENVIRONMENT:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(scope="session")
def signing_options() -> SigningOptions:
    return SigningOptions(algorithm="RS256", expires_in=120)


@pytest.fixture(scope="session")
def rsa_material(signing_options) -> KeyMaterial:
    return generate_key_material(signing_options)


@pytest.fixture(scope="session")
def other_rsa_material(signing_options) -> KeyMaterial:
    return generate_key_material(signing_options)


@pytest.fixture(scope="session")
def mismatched_material(rsa_material, other_rsa_material) -> KeyMaterial:
    """Structurally valid keys whose halves do not belong together."""
    return KeyMaterial(
        private_key=rsa_material.private_key,
        public_key=other_rsa_material.public_key,
    )


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()
