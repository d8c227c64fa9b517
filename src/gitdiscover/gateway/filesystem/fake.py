"""In-memory fake for testing filesystem-dependent discovery.

Follows constructor injection pattern - all state via kwargs.
"""

import errno
from pathlib import Path

from gitdiscover.gateway.filesystem.abc import EntryStat, Filesystem

# Linux gives up after 40 nested links with ELOOP
_FAKE_LOOP_LIMIT = 40


class FakeFilesystem(Filesystem):
    """In-memory fake for testing discovery without touching disk.

    This class has NO public setup methods. All state is provided via constructor.
    Calls are recorded so tests can assert which paths a search examined.

    Example:
        fs = FakeFilesystem(
            cwd=Path("/work/repo/src"),
            directories={Path("/work/repo/.git/objects"), Path("/work/repo/.git/refs")},
            files={Path("/work/repo/.git/HEAD"): "ref: refs/heads/main\\n"},
            devices={Path("/work"): 2},
        )
    """

    def __init__(
        self,
        *,
        cwd: Path | None = None,
        directories: set[Path] | None = None,
        files: dict[Path, bytes | str] | None = None,
        symlinks: dict[Path, Path] | None = None,
        devices: dict[Path, int] | None = None,
        unreadable: set[Path] | None = None,
        default_device: int = 1,
    ) -> None:
        """Create FakeFilesystem with configured entries.

        Args:
            cwd: Reported working directory (defaults to "/")
            directories: Directories that exist; parents are created implicitly
            files: Regular files mapped to their content
            symlinks: Symlinks mapped to their stored target
            devices: Device id for a directory and everything beneath it
                (the longest matching prefix wins)
            unreadable: Directories whose children cannot be examined
            default_device: Device id for paths not covered by `devices`
        """
        self._cwd = cwd if cwd is not None else Path("/")
        self._files = {
            path: content.encode("utf-8") if isinstance(content, str) else content
            for path, content in (files or {}).items()
        }
        self._symlinks = dict(symlinks or {})
        self._devices = dict(devices or {})
        self._unreadable = set(unreadable or set())
        self._default_device = default_device

        self._directories: set[Path] = set()
        for path in [*(directories or set()), *self._files, *self._symlinks, self._cwd]:
            parent = path if path in (directories or set()) or path == self._cwd else path.parent
            self._directories.add(parent)
            self._directories.update(parent.parents)

        self._stat_calls: list[Path] = []
        self._lstat_calls: list[Path] = []
        self._read_calls: list[Path] = []

    @property
    def stat_calls(self) -> list[Path]:
        """Paths passed to stat(), in call order."""
        return list(self._stat_calls)

    @property
    def lstat_calls(self) -> list[Path]:
        """Paths passed to lstat(), in call order."""
        return list(self._lstat_calls)

    @property
    def read_calls(self) -> list[Path]:
        """Paths passed to read_bytes(), in call order."""
        return list(self._read_calls)

    def stat(self, path: Path) -> EntryStat | None:
        self._stat_calls.append(path)
        resolved = self._resolve(path, follow_last=True)
        if resolved is None:
            return None
        return self._entry(resolved)

    def lstat(self, path: Path) -> EntryStat | None:
        self._lstat_calls.append(path)
        resolved = self._resolve(path, follow_last=False)
        if resolved is None:
            return None
        return self._entry(resolved)

    def read_link(self, path: Path) -> Path:
        resolved = self._resolve(path, follow_last=False)
        if resolved is None or resolved not in self._symlinks:
            raise OSError(errno.EINVAL, "Invalid argument", str(path))
        return self._symlinks[resolved]

    def read_bytes(self, path: Path) -> bytes:
        self._read_calls.append(path)
        resolved = self._resolve(path, follow_last=True)
        if resolved is None:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory", str(path))
        if resolved in self._directories:
            raise IsADirectoryError(errno.EISDIR, "Is a directory", str(path))
        return self._files[resolved]

    def get_cwd(self) -> Path:
        return self._cwd

    def _entry(self, resolved: Path) -> EntryStat:
        if resolved in self._symlinks:
            kind = "symlink"
        elif resolved in self._directories:
            kind = "dir"
        else:
            kind = "file"
        size = len(self._files[resolved]) if kind == "file" else 0
        return EntryStat(kind=kind, device_id=self._device_of(resolved), size=size)

    def _exists(self, path: Path) -> bool:
        return path in self._directories or path in self._files or path in self._symlinks

    def _device_of(self, path: Path) -> int:
        for candidate in (path, *path.parents):
            if candidate in self._devices:
                return self._devices[candidate]
        return self._default_device

    def _resolve(self, path: Path, *, follow_last: bool) -> Path | None:
        """Walk `path` like the kernel would, returning the entry it names."""
        pending = list(path.parts[1:])
        current = Path(path.anchor)
        links_followed = 0
        while pending:
            part = pending.pop(0)
            if part in ("", "."):
                continue
            if part == "..":
                current = current.parent
                continue
            if current in self._unreadable:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            candidate = current / part
            is_last = not pending
            if candidate in self._symlinks and (not is_last or follow_last):
                links_followed += 1
                if links_followed > _FAKE_LOOP_LIMIT:
                    return None
                target = self._symlinks[candidate]
                if target.is_absolute():
                    current = Path(target.anchor)
                    pending = list(target.parts[1:]) + pending
                else:
                    pending = list(target.parts) + pending
                continue
            if not self._exists(candidate):
                return None
            if not is_last and candidate not in self._directories:
                return None
            current = candidate
        return current
