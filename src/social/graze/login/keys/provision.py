"""
Key Provisioner

Resolves the signing keypair once, synchronously, before the service starts:

    TryLoad -> ValidateLoaded -> Done
    TryLoad / ValidateLoaded failure -> classify -> Regenerate | Fatal
    Regenerate -> Generate -> RotateBackups -> Persist -> Done

Loaded material that passes validation is used unchanged and nothing is written. An invalid
pair on disk is handled like an absent one for recovery purposes but reported as its own
cause. Regeneration is only allowed when the operator configured no key path and the load
step did not fail part-way through reading key bytes; otherwise the configured material
looks intentional and the provisioner refuses to replace it.

Two provisioners running concurrently against the same key directory race on the backup
index scan and on the write after rotation. That mode is not supported.
"""

import logging
from typing import Optional

from social.graze.login.keys.backup import rotate_backup
from social.graze.login.keys.errors import (
    FatalConfigurationConflict,
    KeyGenerationFailure,
    UnknownReadError,
    describe_failure,
)
from social.graze.login.keys.fs import KeyFileSystem, LocalFileSystem
from social.graze.login.keys.generator import generate_key_material
from social.graze.login.keys.loader import load_key_material
from social.graze.login.keys.model import (
    DEFAULT_KEY_SIZE,
    FailureKind,
    KeyFailure,
    KeyMaterial,
    KeyPaths,
    ProvisioningOutcome,
    ProvisioningStatus,
    SigningOptions,
)
from social.graze.login.keys.persist import persist_key_material
from social.graze.login.keys.validator import validate_key_material

logger = logging.getLogger(__name__)


class KeyProvisioner:
    """Loads, validates or regenerates the signing keypair.

    Args:
        paths: Key file locations and whether they were configured explicitly
        options: Signing algorithm and token lifetime used for validation and generation
        fs: Filesystem capability (defaults to the local disk)
        key_size: RSA modulus size for generated keys
    """

    def __init__(
        self,
        paths: KeyPaths,
        options: SigningOptions,
        fs: Optional[KeyFileSystem] = None,
        key_size: int = DEFAULT_KEY_SIZE,
    ) -> None:
        self.paths = paths
        self.options = options
        self.fs = fs if fs is not None else LocalFileSystem()
        self.key_size = key_size

    def resolve(self) -> ProvisioningOutcome:
        """Run provisioning and return the resolved keypair.

        Raises:
            ProvisioningError: Any fatal condition; the caller is expected to terminate
        """
        loaded = load_key_material(self.fs, self.paths)
        if isinstance(loaded, KeyMaterial):
            failure = validate_key_material(loaded, self.options)
            if failure is None:
                logger.info(
                    "Loaded keypair from %s and %s.",
                    self.paths.private_path,
                    self.paths.public_path,
                )
                return ProvisioningOutcome(
                    ProvisioningStatus.LOADED, loaded, self.paths
                )
        else:
            failure = loaded

        self._check_recoverable(failure)
        return self._regenerate()

    def _check_recoverable(self, failure: KeyFailure) -> None:
        message = describe_failure(failure, self.paths)

        if failure.kind is FailureKind.UNKNOWN_READ_ERROR:
            logger.error(message)
            raise UnknownReadError(failure.path, failure.detail)

        if self.paths.explicit or failure.bytes_read:
            logger.error(message)
            raise FatalConfigurationConflict(
                failure.kind, message, failure.path or self.paths.private_path
            )

        logger.info("No usable keypair found: %s", message)

    def _regenerate(self) -> ProvisioningOutcome:
        logger.info(
            "Generating new keypair and saving to %s and %s...",
            self.paths.private_path,
            self.paths.public_path,
        )
        material = generate_key_material(self.options, self.key_size)

        failure = validate_key_material(material, self.options)
        if failure is not None:
            raise KeyGenerationFailure(
                f"Generated keypair failed validation ({failure.detail})."
            )

        for path in (self.paths.private_path, self.paths.public_path):
            rotate_backup(self.fs, path)

        persist_key_material(self.fs, self.paths, material)
        return ProvisioningOutcome(ProvisioningStatus.REGENERATED, material, self.paths)
