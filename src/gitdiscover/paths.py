"""Path normalization for discovery comparisons.

Every platform quirk lives here: extended-length prefixes (`\\\\?\\C:\\...`,
`\\\\?\\UNC\\server\\share`), case-insensitive comparison and lexical
`.`/`..` collapsing. Other modules only ever see paths produced by
PathNormalizer and compare them through PathNormalizer.key().
"""

import ntpath
import os
import posixpath
from pathlib import Path

_VERBATIM_PREFIX = "\\\\?\\"
_VERBATIM_UNC_PREFIX = "\\\\?\\UNC\\"
_UNC_PREFIX = "\\\\"

# Paths this long need the extended-length prefix for Win32 file APIs
_WINDOWS_MAX_PATH = 260


def strip_verbatim_prefix(path: str) -> str:
    """Remove an extended-length prefix, keeping the path's meaning.

    Examples:
        \\\\?\\C:\\repo       -> C:\\repo
        \\\\?\\UNC\\srv\\share -> \\\\srv\\share
        /home/user/repo     -> /home/user/repo
    """
    if path.startswith(_VERBATIM_UNC_PREFIX):
        return _UNC_PREFIX + path[len(_VERBATIM_UNC_PREFIX) :]
    if path.startswith(_VERBATIM_PREFIX):
        return path[len(_VERBATIM_PREFIX) :]
    return path


def add_verbatim_prefix(path: str) -> str:
    """Inverse of strip_verbatim_prefix for absolute Windows paths."""
    if path.startswith(_VERBATIM_PREFIX):
        return path
    if path.startswith(_UNC_PREFIX):
        return _VERBATIM_UNC_PREFIX + path[len(_UNC_PREFIX) :]
    if ntpath.isabs(path):
        return _VERBATIM_PREFIX + path
    return path


def to_os_path(path: Path, *, windows: bool = os.name == "nt") -> str:
    """Render a normalized path for an OS call.

    Long absolute Windows paths get the extended-length prefix back;
    everything else is passed through.
    """
    rendered = os.fspath(path)
    if windows and len(rendered) >= _WINDOWS_MAX_PATH:
        return add_verbatim_prefix(rendered)
    return rendered


class PathNormalizer:
    """Turns arbitrary paths into absolute, comparable ones.

    The working directory is supplied once and reused, so every comparison
    in one search is made against the same base.
    """

    def __init__(self, cwd: Path, *, windows: bool = os.name == "nt") -> None:
        self._windows = windows
        self._cwd = self._lexical(strip_verbatim_prefix(os.fspath(cwd)))

    @property
    def cwd(self) -> str:
        return self._cwd

    def normalize(self, path: Path | str) -> Path:
        """Make `path` absolute against the stored cwd and collapse '.'/'..'.

        Nothing else is rewritten: no symlink resolution, no case changes.
        """
        raw = strip_verbatim_prefix(os.fspath(path))
        if not self._isabs(raw):
            raw = self._join(self._cwd, raw)
        return Path(self._lexical(raw))

    def key(self, path: Path | str) -> str:
        """Comparison key independent of trailing separators and prefixes."""
        normalized = os.fspath(self.normalize(path))
        if self._windows:
            return ntpath.normcase(normalized)
        return normalized

    def is_strict_ancestor(self, ancestor: Path, path: Path) -> bool:
        """Whether `ancestor` is a proper parent directory of `path`."""
        return self.is_strict_ancestor_key(self.key(ancestor), self.key(path))

    def is_strict_ancestor_key(self, ancestor_key: str, path_key: str) -> bool:
        """is_strict_ancestor() for keys that were already computed with key()."""
        if ancestor_key == path_key:
            return False
        sep = "\\" if self._windows else "/"
        prefix = ancestor_key if ancestor_key.endswith(sep) else ancestor_key + sep
        return path_key.startswith(prefix)

    def _isabs(self, raw: str) -> bool:
        return ntpath.isabs(raw) if self._windows else raw.startswith("/")

    def _join(self, base: str, raw: str) -> str:
        return ntpath.join(base, raw) if self._windows else f"{base}/{raw}"

    def _lexical(self, raw: str) -> str:
        if self._windows:
            return ntpath.normpath(raw)
        collapsed = posixpath.normpath(raw)
        # normpath keeps a leading '//' on POSIX; one root is enough for comparing
        if collapsed.startswith("//"):
            collapsed = "/" + collapsed.lstrip("/")
        return collapsed
