"""Filesystem capability for key provisioning.

Every disk access made while provisioning goes through a KeyFileSystem so that the exact
sequence of reads, renames and writes can be observed and substituted in tests.
"""

import os
from typing import Protocol


class KeyFileSystem(Protocol):
    def read_bytes(self, path: str) -> bytes:
        """Return the file content. Raises FileNotFoundError when the path does not exist."""
        ...

    def exists(self, path: str) -> bool: ...

    def rename(self, src: str, dst: str) -> None: ...

    def write_bytes(self, path: str, data: bytes, mode: int) -> None:
        """Create or truncate the file, write data and set its permission bits to mode."""
        ...


class LocalFileSystem:
    """KeyFileSystem backed by the local disk."""

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as fd:
            return fd.read()

    def exists(self, path: str) -> bool:
        # A dangling symlink still occupies the name.
        return os.path.lexists(path)

    def rename(self, src: str, dst: str) -> None:
        os.rename(src, dst)

    def write_bytes(self, path: str, data: bytes, mode: int) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        # The creation mode above is subject to the umask.
        os.chmod(path, mode)
