"""Fatal key provisioning errors.

Every ProvisioningError aborts startup. The message is written for the operator and names
the file involved and the cause: missing file, failed validation or an unknown I/O error.
"""

from typing import Optional

from social.graze.login.keys.model import FailureKind, KeyFailure, KeyPaths


class ProvisioningError(Exception):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class FatalConfigurationConflict(ProvisioningError):
    """Key material was configured or partially present but cannot be used.

    ``cause`` is MISSING_FILE or INVALID_KEY_PAIR.
    """

    def __init__(
        self, cause: FailureKind, message: str, path: Optional[str] = None
    ) -> None:
        super().__init__(message, path)
        self.cause = cause


class UnknownReadError(ProvisioningError):
    def __init__(self, path: Optional[str], detail: Optional[str]) -> None:
        super().__init__(
            f"Unknown error when loading keypair from {path} ({detail}).", path
        )
        self.detail = detail


class PersistenceFailure(ProvisioningError):
    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Could not save key material at {path} ({detail}).", path)
        self.detail = detail


class KeyGenerationFailure(ProvisioningError):
    pass


def describe_failure(failure: KeyFailure, paths: KeyPaths) -> str:
    """Human readable diagnostic for a load or validation failure."""
    if failure.kind is FailureKind.MISSING_FILE:
        return f"Could not find key at path {failure.path}."
    if failure.kind is FailureKind.INVALID_KEY_PAIR:
        return (
            "Testing provided keypair failed (could not verify a signed token) "
            f"for {paths.private_path} and {paths.public_path}: {failure.detail}"
        )
    return f"Unknown error when loading keypair from {failure.path} ({failure.detail})."
