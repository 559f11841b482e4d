"""
Unit tests for key persistence and the local filesystem capability.
"""

import errno
import os
import stat

import pytest

from social.graze.login.keys.errors import PersistenceFailure
from social.graze.login.keys.fs import LocalFileSystem
from social.graze.login.keys.model import KeyMaterial, KeyPaths
from social.graze.login.keys.persist import (
    PRIVATE_KEY_MODE,
    PUBLIC_KEY_MODE,
    persist_key_material,
)

from tests.test_helpers import MemoryFileSystem


class TestPersistKeyMaterial:
    def test_writes_with_asymmetric_modes(self):
        fs = MemoryFileSystem()
        material = KeyMaterial(private_key=b"priv", public_key=b"pub")

        persist_key_material(fs, KeyPaths(), material)

        assert fs.operations == [
            ("write", "./private.key", PRIVATE_KEY_MODE),
            ("write", "./public.key", PUBLIC_KEY_MODE),
        ]
        assert fs.files == {"./private.key": b"priv", "./public.key": b"pub"}

    def test_private_write_failure(self):
        fs = MemoryFileSystem()
        fs.write_errors["./private.key"] = PermissionError(
            errno.EACCES, "Permission denied"
        )

        with pytest.raises(PersistenceFailure) as exc_info:
            persist_key_material(fs, KeyPaths(), KeyMaterial(b"priv", b"pub"))

        assert exc_info.value.path == "./private.key"
        assert fs.operations == []

    def test_local_permissions_ignore_umask(self, tmp_path):
        """Test that permission bits are exact even with a restrictive umask."""
        paths = KeyPaths.from_config(
            str(tmp_path / "private.key"), str(tmp_path / "public.key")
        )
        previous = os.umask(0o077)
        try:
            persist_key_material(LocalFileSystem(), paths, KeyMaterial(b"priv", b"pub"))
        finally:
            os.umask(previous)

        assert stat.S_IMODE(os.stat(paths.private_path).st_mode) == 0o600
        assert stat.S_IMODE(os.stat(paths.public_path).st_mode) == 0o644
        assert (tmp_path / "public.key").read_bytes() == b"pub"


class TestLocalFileSystem:
    def test_exists_sees_dangling_symlink(self, tmp_path):
        link = tmp_path / "private.key"
        link.symlink_to(tmp_path / "missing-target")

        assert LocalFileSystem().exists(str(link)) is True

    def test_write_truncates_existing_file(self, tmp_path):
        target = tmp_path / "public.key"
        target.write_bytes(b"a much longer previous content")

        LocalFileSystem().write_bytes(str(target), b"new", 0o644)

        assert target.read_bytes() == b"new"
