"""Numbered backup rotation for key files.

Before a key file is replaced its current content is moved to the lowest unused backup
slot: ``./private.key`` becomes ``./private.backup.1.key``, then ``./private.backup.2.key``
on the next rotation, and so on. Existing backups are never read, moved or overwritten.
"""

import logging
import os
from typing import Optional

from social.graze.login.keys.errors import PersistenceFailure
from social.graze.login.keys.fs import KeyFileSystem

logger = logging.getLogger(__name__)


def backup_candidate(path: str, index: int) -> str:
    """Name of backup slot ``index`` for ``path``; slot 0 is the path itself."""
    if index == 0:
        return path
    base, ext = os.path.splitext(path)
    return f"{base}.backup.{index}{ext}"


def next_backup_index(fs: KeyFileSystem, path: str) -> int:
    """Smallest index whose candidate name is free, scanning upward from 0."""
    index = 0
    while fs.exists(backup_candidate(path, index)):
        index += 1
    return index


def rotate_backup(fs: KeyFileSystem, path: str) -> Optional[str]:
    """Free ``path`` by moving its current file to the lowest unused backup slot.

    Args:
        fs: Filesystem to operate on
        path: Key file that is about to be written

    Returns:
        The backup file name, or None when nothing occupied ``path``.

    Raises:
        PersistenceFailure: When the rename fails
    """
    index = next_backup_index(fs, path)
    if index == 0:
        return None

    destination = backup_candidate(path, index)
    logger.warning("Renaming %s to %s...", path, destination)
    try:
        fs.rename(path, destination)
    except OSError as e:
        raise PersistenceFailure(
            path, f"could not rename to {destination}: {type(e).__name__}: {e}"
        ) from e
    return destination
