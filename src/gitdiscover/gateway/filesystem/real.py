"""Production Filesystem implementation using os.stat and friends."""

import errno
import os
import stat
from pathlib import Path

from gitdiscover.gateway.filesystem.abc import EntryKind, EntryStat, Filesystem
from gitdiscover.paths import to_os_path

# errno values meaning "there is nothing usable at this path"
_ABSENT_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.ELOOP})


def _entry_kind(mode: int) -> EntryKind:
    if stat.S_ISDIR(mode):
        return "dir"
    if stat.S_ISREG(mode):
        return "file"
    if stat.S_ISLNK(mode):
        return "symlink"
    return "other"


class RealFilesystem(Filesystem):
    """Production implementation backed by the operating system."""

    def stat(self, path: Path) -> EntryStat | None:
        return self._stat(path, follow_symlinks=True)

    def lstat(self, path: Path) -> EntryStat | None:
        return self._stat(path, follow_symlinks=False)

    def read_link(self, path: Path) -> Path:
        return Path(os.readlink(to_os_path(path)))

    def read_bytes(self, path: Path) -> bytes:
        with open(to_os_path(path), "rb") as handle:
            return handle.read()

    def get_cwd(self) -> Path:
        return Path(os.getcwd())

    def _stat(self, path: Path, *, follow_symlinks: bool) -> EntryStat | None:
        try:
            result = os.stat(to_os_path(path), follow_symlinks=follow_symlinks)
        except OSError as e:
            if e.errno in _ABSENT_ERRNOS:
                return None
            raise
        return EntryStat(
            kind=_entry_kind(result.st_mode), device_id=result.st_dev, size=result.st_size
        )
