"""Writes key material to disk."""

import logging
from typing import Final

from social.graze.login.keys.errors import PersistenceFailure
from social.graze.login.keys.fs import KeyFileSystem
from social.graze.login.keys.model import KeyMaterial, KeyPaths

logger = logging.getLogger(__name__)

PRIVATE_KEY_MODE: Final = 0o600
PUBLIC_KEY_MODE: Final = 0o644


def persist_key_material(
    fs: KeyFileSystem, paths: KeyPaths, material: KeyMaterial
) -> None:
    """Write the private key owner read/write only and the public key world readable.

    Raises:
        PersistenceFailure: On any write or permission error
    """
    for path, data, mode in (
        (paths.private_path, material.private_key, PRIVATE_KEY_MODE),
        (paths.public_path, material.public_key, PUBLIC_KEY_MODE),
    ):
        try:
            fs.write_bytes(path, data, mode)
        except OSError as e:
            raise PersistenceFailure(path, f"{type(e).__name__}: {e}") from e
        logger.debug("Wrote %s with mode %o", path, mode)
