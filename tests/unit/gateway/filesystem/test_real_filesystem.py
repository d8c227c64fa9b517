"""Tests for RealFilesystem against a temporary directory."""

import os
from pathlib import Path

from gitdiscover.gateway.filesystem.real import RealFilesystem


class TestRealFilesystem:
    """Tests for RealFilesystem."""

    def test_stat_kinds(self, tmp_path: Path) -> None:
        (tmp_path / "dir").mkdir()
        (tmp_path / "file").write_text("x", encoding="utf-8")
        fs = RealFilesystem()

        dir_entry = fs.stat(tmp_path / "dir")
        file_entry = fs.stat(tmp_path / "file")

        assert dir_entry is not None and dir_entry.is_dir
        assert file_entry is not None and file_entry.is_file

    def test_missing_paths_are_none(self, tmp_path: Path) -> None:
        (tmp_path / "file").write_text("x", encoding="utf-8")
        fs = RealFilesystem()

        assert fs.stat(tmp_path / "missing") is None
        # ENOTDIR
        assert fs.stat(tmp_path / "file" / "child") is None

    def test_dangling_symlink(self, tmp_path: Path) -> None:
        os.symlink(tmp_path / "nowhere", tmp_path / "dangling")
        fs = RealFilesystem()

        lstat_entry = fs.lstat(tmp_path / "dangling")

        assert fs.stat(tmp_path / "dangling") is None
        assert lstat_entry is not None and lstat_entry.is_symlink
        assert fs.read_link(tmp_path / "dangling") == tmp_path / "nowhere"

    def test_device_id_matches_os_stat(self, tmp_path: Path) -> None:
        entry = RealFilesystem().stat(tmp_path)

        assert entry is not None
        assert entry.device_id == os.stat(tmp_path).st_dev

    def test_read_bytes(self, tmp_path: Path) -> None:
        (tmp_path / "pointer").write_bytes(b"gitdir: ../x\n")

        assert RealFilesystem().read_bytes(tmp_path / "pointer") == b"gitdir: ../x\n"

    def test_file_size(self, tmp_path: Path) -> None:
        (tmp_path / "pointer").write_bytes(b"gitdir: ../x\n")

        entry = RealFilesystem().stat(tmp_path / "pointer")

        assert entry is not None
        assert entry.size == 13
