"""
Configuration Module for the Login Server

This module defines the configuration system for the login server, using Pydantic settings
for validation and typed AppKeys for dependency injection into the aiohttp application.

The configuration follows these principles:
1. Environment-based configuration (plus an optional .env file) with development defaults
2. Strong validation and typing through Pydantic
3. Key material is never part of the settings: it is resolved once by the key provisioner
   and handed to the application explicitly

Key configuration areas include:
- Service identification and networking (environment, port, base URL, allowed origins)
- Database connection (Mongo URL assembly)
- Rate limiting
- Signing keys (paths, algorithm, token lifetime, generated key size)
"""

import logging
from typing import Any, Dict, Final, List, Optional
from urllib.parse import urlparse

from aiohttp import web
from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from social.graze.login.keys.model import (
    DEFAULT_KEY_SIZE,
    KEY_TYPES,
    MINIMUM_EXPIRES_IN,
    KeyPaths,
    ProvisioningOutcome,
    SigningOptions,
)
from social.graze.login.tokens import TokenIssuer

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN: Final = 120


class Settings(BaseSettings):
    """
    Application settings for the login server.

    Values are loaded from environment variables (and a .env file in the working directory),
    with defaults suitable for development. Aliases keep historical variable names working,
    for example the key paths can be set with JWT_PRIVATE_KEY_PATH or JTW_PRIVATE_KEY_PATH.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment and service identification
    environment: str = Field(
        "development", validation_alias=AliasChoices("node_env", "environment")
    )
    """
    Deployment environment. "test" switches the database name and the provider list.
    Set with NODE_ENV environment variable.
    """

    http_port: int = Field(alias="port", default=3004)
    """
    HTTP port for the service to listen on.
    Set with PORT environment variable.
    """

    base_url: Optional[str] = None
    """
    Public base URL of the service, used for provider callback URLs and allowed origins.
    Must be a full http(s) URL. Defaults to http://localhost:<port>.
    Set with BASE_URL environment variable.
    """

    title: str = "Login Server"

    session_secret: str = "keyboard cat"
    """Set with SESSION_SECRET environment variable."""

    allowed_origins: str = ""
    """
    Comma-separated list of additional origins allowed for CORS. The origin of the base
    URL is always allowed.
    Set with ALLOWED_ORIGINS environment variable.
    """

    sentry_dsn: Optional[str] = None
    """Sentry DSN for error reporting. Optional, no error reporting if not set."""

    # Database connection
    mongo_user: str = ""
    mongo_pass: str = ""
    mongo_host: str = "localhost"
    mongo_port: int = 27017
    mongo_db: str = "login-server"

    # Rate limiting
    rate_limit_window: int = 60 * 1000
    """Rate limit window in milliseconds. Set with RATE_LIMIT_WINDOW environment variable."""

    rate_limit_max: int = 10
    """Maximum requests per window. Set with RATE_LIMIT_MAX environment variable."""

    # Signing keys
    jwt_private_key_path: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("jwt_private_key_path", "jtw_private_key_path"),
    )
    """
    Path of the private signing key. When set (or when the public key path is set) the
    keypair must exist and be valid; it is never regenerated.
    Set with JWT_PRIVATE_KEY_PATH (or JTW_PRIVATE_KEY_PATH) environment variable.
    """

    jwt_public_key_path: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("jwt_public_key_path", "jtw_public_key_path"),
    )
    """
    Path of the public verification key.
    Set with JWT_PUBLIC_KEY_PATH (or JTW_PUBLIC_KEY_PATH) environment variable.
    """

    jwt_algorithm: str = "RS256"
    """
    Asymmetric JWS algorithm for session tokens (RS*, PS* or ES*).
    Set with JWT_ALGORITHM environment variable.
    """

    jwt_expires_in: int = DEFAULT_EXPIRES_IN
    """
    Token lifetime in seconds, minimum 10.
    Set with JWT_EXPIRES_IN environment variable.
    """

    jwt_key_size: int = DEFAULT_KEY_SIZE
    """RSA modulus size for generated keys, minimum 2048."""

    @field_validator("jwt_algorithm")
    @classmethod
    def check_jwt_algorithm(cls, v: str) -> str:
        if v not in KEY_TYPES:
            raise ValueError(
                f"jwt_algorithm must be one of {', '.join(KEY_TYPES)}, got {v!r}"
            )
        return v

    @field_validator("jwt_expires_in", mode="before")
    @classmethod
    def decode_jwt_expires_in(cls, v: Any) -> int:
        """
        Parse the token lifetime.

        Unparseable or zero values fall back to the default of 120 seconds; values below
        the 10 second minimum are raised to it with a warning.
        """
        try:
            value = int(v)
        except (TypeError, ValueError):
            return DEFAULT_EXPIRES_IN
        if not value:
            return DEFAULT_EXPIRES_IN
        if value < MINIMUM_EXPIRES_IN:
            logger.warning(
                "Minimum for JWT_EXPIRES_IN is %d seconds.", MINIMUM_EXPIRES_IN
            )
            return MINIMUM_EXPIRES_IN
        return value

    @field_validator("jwt_key_size")
    @classmethod
    def check_jwt_key_size(cls, v: int) -> int:
        if v < DEFAULT_KEY_SIZE:
            raise ValueError(f"jwt_key_size must be at least {DEFAULT_KEY_SIZE}")
        return v

    @model_validator(mode="after")
    def check_base_url(self) -> "Settings":
        if not self.base_url:
            self.base_url = f"http://localhost:{self.http_port}"

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError("Please provide a full BASE_URL (http:// or https://).")

        self.base_url = self.base_url.rstrip("/")
        return self

    @property
    def clean_url(self) -> str:
        """Base URL without the scheme, with a trailing slash."""
        parsed = urlparse(self.base_url)
        return self.base_url.removeprefix(f"{parsed.scheme}://") + "/"

    @property
    def ssl(self) -> bool:
        return urlparse(self.base_url).scheme == "https"

    @property
    def origins(self) -> List[str]:
        origins = [
            origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()
        ]
        parsed = urlparse(self.base_url)
        origins.append(f"{parsed.scheme}://{parsed.hostname}")
        return origins

    @property
    def mongo_url(self) -> str:
        auth = f"{self.mongo_user}:{self.mongo_pass}@" if self.mongo_user else ""
        database = self.mongo_db + ("-test" if self.environment == "test" else "")
        return f"mongodb://{auth}{self.mongo_host}:{self.mongo_port}/{database}"

    @property
    def database(self) -> Dict[str, Any]:
        return {
            "url": self.mongo_url,
            "options": {
                "reconnectTries": 60,
                "reconnectInterval": 1000,
                "useNewUrlParser": True,
            },
        }

    @property
    def rate_limit_options(self) -> Dict[str, int]:
        return {"window_ms": self.rate_limit_window, "max": self.rate_limit_max}

    @property
    def key_paths(self) -> KeyPaths:
        return KeyPaths.from_config(self.jwt_private_key_path, self.jwt_public_key_path)

    @property
    def signing_options(self) -> SigningOptions:
        return SigningOptions(
            algorithm=self.jwt_algorithm, expires_in=self.jwt_expires_in
        )


# Application context keys for dependency injection
SettingsAppKey: Final = web.AppKey("settings", Settings)
"""AppKey for accessing the application settings"""

ProvisioningOutcomeAppKey: Final = web.AppKey("provisioning_outcome", ProvisioningOutcome)
"""AppKey for accessing the resolved signing keypair and how it was obtained"""

TokenIssuerAppKey: Final = web.AppKey("token_issuer", TokenIssuer)
"""AppKey for accessing the token issuer built from the resolved keypair"""

ProvidersAppKey: Final = web.AppKey("providers", list)
"""AppKey for accessing the enriched login provider list"""
