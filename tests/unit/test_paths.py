"""Tests for path normalization and extended-length prefix handling."""

from pathlib import Path

import pytest

from gitdiscover.paths import (
    PathNormalizer,
    add_verbatim_prefix,
    strip_verbatim_prefix,
    to_os_path,
)


class TestStripVerbatimPrefix:
    """Tests for strip_verbatim_prefix()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("\\\\?\\C:\\repo", "C:\\repo"),
            ("\\\\?\\UNC\\server\\share\\repo", "\\\\server\\share\\repo"),
            ("C:\\repo", "C:\\repo"),
            ("/home/user/repo", "/home/user/repo"),
        ],
    )
    def test_strips_only_extended_prefixes(self, raw: str, expected: str) -> None:
        assert strip_verbatim_prefix(raw) == expected

    def test_add_is_inverse_for_absolute_paths(self) -> None:
        for raw in ["C:\\repo", "\\\\server\\share\\repo"]:
            assert strip_verbatim_prefix(add_verbatim_prefix(raw)) == raw

    def test_add_leaves_relative_paths_alone(self) -> None:
        assert add_verbatim_prefix("repo\\sub") == "repo\\sub"


class TestToOsPath:
    """Tests for to_os_path()."""

    def test_short_windows_path_is_unchanged(self) -> None:
        assert to_os_path(Path("C:\\repo"), windows=True) == "C:\\repo"

    def test_long_windows_path_gets_prefix(self) -> None:
        long_path = "C:\\" + "\\".join(["segment"] * 40)

        assert to_os_path(Path(long_path), windows=True) == "\\\\?\\" + long_path

    def test_posix_paths_pass_through(self) -> None:
        long_path = "/" + "/".join(["segment"] * 40)

        assert to_os_path(Path(long_path), windows=False) == long_path


class TestPathNormalizer:
    """Tests for PathNormalizer on POSIX paths."""

    def test_relative_path_joins_supplied_cwd(self) -> None:
        normalizer = PathNormalizer(Path("/work/project"), windows=False)

        assert normalizer.normalize("src/lib") == Path("/work/project/src/lib")

    def test_dot_resolves_to_cwd(self) -> None:
        normalizer = PathNormalizer(Path("/work/project"), windows=False)

        assert normalizer.normalize(".") == Path("/work/project")
        assert normalizer.normalize("") == Path("/work/project")

    def test_parent_components_are_collapsed(self) -> None:
        normalizer = PathNormalizer(Path("/work/project"), windows=False)

        assert normalizer.normalize("../other/./x/..") == Path("/work/other")

    def test_absolute_path_ignores_cwd(self) -> None:
        normalizer = PathNormalizer(Path("/work/project"), windows=False)

        assert normalizer.normalize("/srv/repo/") == Path("/srv/repo")

    def test_normalize_is_idempotent(self) -> None:
        normalizer = PathNormalizer(Path("/work"), windows=False)
        once = normalizer.normalize("a/./b/../c")

        assert normalizer.normalize(once) == once

    def test_leading_double_slash_is_collapsed(self) -> None:
        normalizer = PathNormalizer(Path("/"), windows=False)

        assert normalizer.normalize("//srv/repo") == Path("/srv/repo")

    def test_key_ignores_trailing_separator(self) -> None:
        normalizer = PathNormalizer(Path("/"), windows=False)

        assert normalizer.key("/srv/repo/") == normalizer.key("/srv/repo")

    def test_key_is_case_sensitive_on_posix(self) -> None:
        normalizer = PathNormalizer(Path("/"), windows=False)

        assert normalizer.key("/srv/Repo") != normalizer.key("/srv/repo")

    def test_strict_ancestor(self) -> None:
        normalizer = PathNormalizer(Path("/"), windows=False)

        assert normalizer.is_strict_ancestor(Path("/srv"), Path("/srv/repo"))
        assert normalizer.is_strict_ancestor(Path("/"), Path("/srv"))
        assert not normalizer.is_strict_ancestor(Path("/srv/repo"), Path("/srv/repo"))
        assert not normalizer.is_strict_ancestor(Path("/srv/re"), Path("/srv/repo"))


class TestPathNormalizerWindows:
    """Tests for PathNormalizer with Windows path rules."""

    def test_key_is_case_insensitive(self) -> None:
        normalizer = PathNormalizer(Path("C:\\work"), windows=True)

        assert normalizer.key("C:\\Repo\\Sub") == normalizer.key("c:\\repo\\sub\\")

    def test_key_ignores_extended_prefix(self) -> None:
        normalizer = PathNormalizer(Path("C:\\work"), windows=True)

        assert normalizer.key("\\\\?\\C:\\repo") == normalizer.key("C:\\repo")
        assert normalizer.key("\\\\?\\UNC\\srv\\share\\x") == normalizer.key("\\\\srv\\share\\x")

    def test_relative_path_joins_cwd(self) -> None:
        normalizer = PathNormalizer(Path("C:\\work"), windows=True)

        assert normalizer.key("sub\\..\\repo") == normalizer.key("C:\\work\\repo")

    def test_strict_ancestor_with_drive_root(self) -> None:
        normalizer = PathNormalizer(Path("C:\\"), windows=True)

        assert normalizer.is_strict_ancestor(Path("C:\\"), Path("C:\\Repo"))
        assert normalizer.is_strict_ancestor(Path("c:\\repo"), Path("C:\\Repo\\src"))
