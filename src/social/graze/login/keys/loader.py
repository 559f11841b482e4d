"""Reads candidate key bytes from disk."""

import logging
from typing import List, Union

from social.graze.login.keys.fs import KeyFileSystem
from social.graze.login.keys.model import FailureKind, KeyFailure, KeyMaterial, KeyPaths

logger = logging.getLogger(__name__)


def load_key_material(
    fs: KeyFileSystem, paths: KeyPaths
) -> Union[KeyMaterial, KeyFailure]:
    """Read the private key, then the public key, as raw bytes.

    Read failures are returned, not raised. A path that does not exist is classified as
    MISSING_FILE; any other I/O error is UNKNOWN_READ_ERROR with the error in ``detail``.

    Args:
        fs: Filesystem to read from
        paths: Key file locations

    Returns:
        KeyMaterial when both files were read, otherwise a KeyFailure whose ``bytes_read``
        tells whether non-empty key bytes had already been read before the failure.
    """
    loaded: List[bytes] = []
    for path in (paths.private_path, paths.public_path):
        try:
            loaded.append(fs.read_bytes(path))
        except FileNotFoundError:
            logger.debug("Key file %s does not exist", path)
            return KeyFailure(
                FailureKind.MISSING_FILE, path=path, bytes_read=any(loaded)
            )
        except OSError as e:
            return KeyFailure(
                FailureKind.UNKNOWN_READ_ERROR,
                path=path,
                detail=f"{type(e).__name__}: {e}",
                bytes_read=any(loaded),
            )

    private_key, public_key = loaded
    return KeyMaterial(private_key=private_key, public_key=public_key)
