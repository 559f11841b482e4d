"""Value types shared by the key provisioning steps.

All types are immutable. Key material is created once during startup and handed by
reference to the token issuer for the lifetime of the process.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Final, Optional, Tuple


DEFAULT_PRIVATE_KEY_PATH: Final = "./private.key"
DEFAULT_PUBLIC_KEY_PATH: Final = "./public.key"

DEFAULT_KEY_SIZE: Final = 2048
MINIMUM_EXPIRES_IN: Final = 10

KEY_TYPES: Final[Dict[str, Tuple[str, Optional[str]]]] = {
    "RS256": ("RSA", None),
    "RS384": ("RSA", None),
    "RS512": ("RSA", None),
    "PS256": ("RSA", None),
    "PS384": ("RSA", None),
    "PS512": ("RSA", None),
    "ES256": ("EC", "P-256"),
    "ES384": ("EC", "P-384"),
    "ES512": ("EC", "P-521"),
}
"""Supported JWS algorithms mapped to the key type (and curve) they sign with."""


@dataclass(frozen=True)
class KeyPaths:
    """Where the private and public key files live.

    Attributes:
        private_path: Path of the private key file
        public_path: Path of the public key file
        explicit: True when the operator configured either path
    """

    private_path: str = DEFAULT_PRIVATE_KEY_PATH
    public_path: str = DEFAULT_PUBLIC_KEY_PATH
    explicit: bool = False

    @classmethod
    def from_config(
        cls, private_path: Optional[str] = None, public_path: Optional[str] = None
    ) -> "KeyPaths":
        return cls(
            private_path=private_path or DEFAULT_PRIVATE_KEY_PATH,
            public_path=public_path or DEFAULT_PUBLIC_KEY_PATH,
            explicit=bool(private_path or public_path),
        )


@dataclass(frozen=True)
class SigningOptions:
    """Algorithm and token lifetime used for production tokens and for validation."""

    algorithm: str = "RS256"
    expires_in: int = 120


@dataclass(frozen=True)
class KeyMaterial:
    """A resolved keypair as raw (PEM) bytes."""

    private_key: bytes = field(repr=False)
    public_key: bytes


class ProvisioningStatus(Enum):
    LOADED = "loaded"
    REGENERATED = "regenerated"


@dataclass(frozen=True)
class ProvisioningOutcome:
    status: ProvisioningStatus
    material: KeyMaterial
    paths: KeyPaths


class FailureKind(Enum):
    """Why a keypair could not be used."""

    MISSING_FILE = "missing_file"
    INVALID_KEY_PAIR = "invalid_key_pair"
    UNKNOWN_READ_ERROR = "unknown_read_error"


@dataclass(frozen=True)
class KeyFailure:
    """Result of a failed load or validation step.

    Attributes:
        kind: The failure classification
        path: The file involved, when the failure concerns a single file
        detail: Underlying error description
        bytes_read: True when non-empty key bytes had been read before the failure
    """

    kind: FailureKind
    path: Optional[str] = None
    detail: Optional[str] = None
    bytes_read: bool = False
