"""Ceiling directories: boundaries the upward search must not pass."""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from gitdiscover.constants import DEFAULT_MAX_SYMLINKS
from gitdiscover.errors import RealpathError
from gitdiscover.gateway.filesystem.abc import Filesystem
from gitdiscover.paths import PathNormalizer
from gitdiscover.realpath import realpath

logger = logging.getLogger(__name__)


class CeilingSet:
    """Ordered, deduplicated set of absolute ceiling directories.

    Entries are normalized once when the set is built; lookups only compute
    the key of the directory being tested.

    Entries that still need their symlinks resolved are flagged as pending.
    A search resolves them through its own filesystem with resolved(), so a
    ceiling written through a symlink compares equal to the resolved start.
    """

    def __init__(
        self,
        directories: tuple[Path, ...],
        normalizer: PathNormalizer,
        *,
        pending: tuple[bool, ...] | None = None,
    ) -> None:
        self._directories = directories
        self._normalizer = normalizer
        self._ordered_keys = tuple(normalizer.key(d) for d in directories)
        self._keys = frozenset(self._ordered_keys)
        self._pending = pending if pending is not None else (False,) * len(directories)

    @classmethod
    def empty(cls) -> "CeilingSet":
        return cls((), PathNormalizer(Path(os.sep)))

    @classmethod
    def build(
        cls,
        raw: str | bytes | None,
        current_dir: Path,
        *,
        fs: Filesystem | None = None,
        max_symlinks: int = DEFAULT_MAX_SYMLINKS,
        windows: bool = os.name == "nt",
    ) -> "CeilingSet":
        """Build a ceiling set from a path-list string such as GIT_CEILING_DIRECTORIES.

        Entries are separated by ':' (';' on Windows). Relative entries are
        taken relative to `current_dir`. Symlinks in each entry are resolved,
        but an empty entry switches resolution off for every entry after it.
        Entries that are not valid text are skipped.

        Args:
            raw: The list as found in the environment, or None
            current_dir: Base for relative entries
            fs: Filesystem used to resolve symlinks now; None leaves entries
                pending until a search calls resolved()
            max_symlinks: Bound on links followed per entry
            windows: Use Windows separators and case-insensitive comparison

        Returns:
            The ceiling set, empty when `raw` is None or empty
        """
        if not raw:
            return cls((), PathNormalizer(current_dir, windows=windows))

        text = os.fsdecode(raw) if isinstance(raw, bytes) else raw
        separator = ";" if windows else ":"
        return cls.from_entries(
            text.split(separator),
            current_dir,
            fs=fs,
            max_symlinks=max_symlinks,
            windows=windows,
        )

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[str],
        current_dir: Path,
        *,
        fs: Filesystem | None = None,
        max_symlinks: int = DEFAULT_MAX_SYMLINKS,
        windows: bool = os.name == "nt",
    ) -> "CeilingSet":
        """Build a ceiling set from already separated entries.

        Same rules as build(), including the empty entry switching off
        symlink resolution for the entries after it.
        """
        normalizer = PathNormalizer(current_dir, windows=windows)
        resolve_symlinks = True

        directories: list[Path] = []
        pending: list[bool] = []
        seen: set[str] = set()
        for entry in entries:
            if not entry:
                resolve_symlinks = False
                continue
            if not _is_valid_text(entry):
                logger.warning("Skipping ceiling directory that is not valid text: %r", entry)
                continue

            directory = normalizer.normalize(entry)
            if resolve_symlinks and fs is not None:
                directory = _resolved_or_lexical(directory, max_symlinks, fs, normalizer)

            key = normalizer.key(directory)
            if key in seen:
                continue
            seen.add(key)
            directories.append(directory)
            pending.append(resolve_symlinks and fs is None)

        return cls(tuple(directories), normalizer, pending=tuple(pending))

    def resolved(self, fs: Filesystem, max_symlinks: int = DEFAULT_MAX_SYMLINKS) -> "CeilingSet":
        """Resolve symlinks in pending entries through `fs`.

        Returns self when nothing is pending.
        """
        if not any(self._pending):
            return self

        directories: list[Path] = []
        seen: set[str] = set()
        for directory, pending in zip(self._directories, self._pending, strict=True):
            if pending:
                directory = _resolved_or_lexical(directory, max_symlinks, fs, self._normalizer)
            key = self._normalizer.key(directory)
            if key in seen:
                continue
            seen.add(key)
            directories.append(directory)
        return CeilingSet(tuple(directories), self._normalizer)

    @property
    def directories(self) -> tuple[Path, ...]:
        return self._directories

    def contains(self, directory: Path) -> bool:
        """Whether `directory` is exactly one of the ceilings."""
        return self._normalizer.key(directory) in self._keys

    def closest_ancestor(self, directory: Path) -> Path | None:
        """The ceiling strictly above `directory` that is nearest to it.

        A ceiling equal to `directory` does not count.
        """
        directory_key = self._normalizer.key(directory)
        best: Path | None = None
        for ceiling, ceiling_key in zip(self._directories, self._ordered_keys, strict=True):
            if not self._normalizer.is_strict_ancestor_key(ceiling_key, directory_key):
                continue
            if best is None or len(ceiling.parts) > len(best.parts):
                best = ceiling
        return best

    def __len__(self) -> int:
        return len(self._directories)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._directories)

    def __repr__(self) -> str:
        return f"CeilingSet({[str(d) for d in self._directories]!r})"


def _is_valid_text(entry: str) -> bool:
    # os.fsdecode maps undecodable bytes to lone surrogates
    try:
        entry.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _resolved_or_lexical(
    directory: Path,
    max_symlinks: int,
    fs: Filesystem,
    normalizer: PathNormalizer,
) -> Path:
    try:
        return normalizer.normalize(realpath(directory, Path(normalizer.cwd), max_symlinks, fs))
    except (RealpathError, OSError) as e:
        logger.warning("Using ceiling directory %s without resolving symlinks: %s", directory, e)
        return directory
