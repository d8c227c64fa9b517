"""Filesystem operations abstraction for repository discovery.

Discovery only ever looks at directory and file *shape*: whether an entry
exists, what kind it is, which device it lives on, where a symlink points,
and the bytes of a small pointer file. This ABC covers exactly that, so the
search can run against the real disk or an in-memory fake.

Absent entries are reported as None rather than raised. Any other OSError
(permission denied, I/O error) propagates to the caller.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

EntryKind = Literal["dir", "file", "symlink", "other"]


@dataclass(frozen=True)
class EntryStat:
    """Kind, device and size of a filesystem entry."""

    kind: EntryKind
    device_id: int
    size: int = 0

    @property
    def is_dir(self) -> bool:
        return self.kind == "dir"

    @property
    def is_file(self) -> bool:
        return self.kind == "file"

    @property
    def is_symlink(self) -> bool:
        return self.kind == "symlink"


class Filesystem(ABC):
    """Abstract read-only filesystem access for dependency injection.

    Implementations:
    - RealFilesystem: Production implementation using os.stat and friends
    - FakeFilesystem: In-memory fake for testing
    """

    @abstractmethod
    def stat(self, path: Path) -> EntryStat | None:
        """Stat a path, following symlinks.

        Args:
            path: Absolute path to examine

        Returns:
            EntryStat of the final target, or None if it does not exist
            (including dangling symlinks and symlink loops)

        Raises:
            OSError: For failures other than the entry being absent
        """
        ...

    @abstractmethod
    def lstat(self, path: Path) -> EntryStat | None:
        """Stat a path without following a symlink in its last component.

        Args:
            path: Absolute path to examine

        Returns:
            EntryStat of the entry itself, or None if it does not exist

        Raises:
            OSError: For failures other than the entry being absent
        """
        ...

    @abstractmethod
    def read_link(self, path: Path) -> Path:
        """Read the target of a symlink.

        Args:
            path: Path of the symlink

        Returns:
            The link target exactly as stored (may be relative)

        Raises:
            OSError: If path is not a symlink or cannot be read
        """
        ...

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        """Read a file's full contents.

        Args:
            path: Path of the file

        Returns:
            File contents

        Raises:
            OSError: If the file cannot be read
        """
        ...

    @abstractmethod
    def get_cwd(self) -> Path:
        """Get the current working directory.

        Returns:
            Absolute path of the process working directory
        """
        ...
