"""Tests for bounded symlink resolution."""

import os
from pathlib import Path

import pytest

from gitdiscover.errors import EmptyPath, MissingParent, SymlinkIndirectionLimitExceeded
from gitdiscover.gateway.filesystem.fake import FakeFilesystem
from gitdiscover.gateway.filesystem.real import RealFilesystem
from gitdiscover.realpath import realpath


class TestRealpathOnDisk:
    """Tests for realpath() against the real filesystem."""

    def test_path_without_symlinks_is_unchanged(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b"
        target.mkdir(parents=True)

        assert realpath(target, tmp_path, 8, RealFilesystem()) == target

    def test_resolves_absolute_link(self, tmp_path: Path) -> None:
        real_dir = tmp_path / "real"
        (real_dir / "sub").mkdir(parents=True)
        os.symlink(real_dir, tmp_path / "link")

        result = realpath(tmp_path / "link" / "sub", tmp_path, 8, RealFilesystem())

        assert result == real_dir / "sub"

    def test_resolves_relative_link_against_its_directory(self, tmp_path: Path) -> None:
        (tmp_path / "real").mkdir()
        (tmp_path / "nested").mkdir()
        os.symlink("../real", tmp_path / "nested" / "link")

        result = realpath(tmp_path / "nested" / "link", tmp_path, 8, RealFilesystem())

        assert result == tmp_path / "real"

    def test_relative_input_uses_supplied_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "dir").mkdir()

        assert realpath("dir/./x/..", tmp_path, 8, RealFilesystem()) == tmp_path / "dir"

    def test_missing_components_are_kept(self, tmp_path: Path) -> None:
        result = realpath(tmp_path / "missing" / "deeper", tmp_path, 8, RealFilesystem())

        assert result == tmp_path / "missing" / "deeper"

    def test_link_loop_exceeds_limit(self, tmp_path: Path) -> None:
        os.symlink(tmp_path / "b", tmp_path / "a")
        os.symlink(tmp_path / "a", tmp_path / "b")

        with pytest.raises(SymlinkIndirectionLimitExceeded) as exc_info:
            realpath(tmp_path / "a", tmp_path, 5, RealFilesystem())

        assert exc_info.value.max_symlinks == 5


class TestRealpathEdgeCases:
    """Tests for realpath() error conditions using FakeFilesystem."""

    def test_empty_path_is_rejected(self) -> None:
        with pytest.raises(EmptyPath):
            realpath("", Path("/"), 8, FakeFilesystem())

    def test_parent_of_root_is_rejected(self) -> None:
        with pytest.raises(MissingParent):
            realpath("/..", Path("/"), 8, FakeFilesystem())

    def test_limit_counts_every_link_in_a_chain(self) -> None:
        fs = FakeFilesystem(
            directories={Path("/target")},
            symlinks={
                Path("/one"): Path("/two"),
                Path("/two"): Path("/three"),
                Path("/three"): Path("/target"),
            },
        )

        assert realpath("/one", Path("/"), 3, fs) == Path("/target")
        with pytest.raises(SymlinkIndirectionLimitExceeded):
            realpath("/one", Path("/"), 2, fs)

    def test_zero_limit_rejects_any_link(self) -> None:
        fs = FakeFilesystem(directories={Path("/target")}, symlinks={Path("/link"): Path("/target")})

        with pytest.raises(SymlinkIndirectionLimitExceeded):
            realpath("/link", Path("/"), 0, fs)

    def test_parent_component_after_link_uses_link_target(self) -> None:
        fs = FakeFilesystem(
            directories={Path("/deep/inside/dir"), Path("/top")},
            symlinks={Path("/top/link"): Path("/deep/inside/dir")},
        )

        assert realpath("/top/link/..", Path("/"), 8, fs) == Path("/deep/inside")
