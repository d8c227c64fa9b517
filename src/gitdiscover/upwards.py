"""Upward search for the repository enclosing a directory.

The search starts at a directory and moves to its parent one step at a
time, asking the classifier about each directory on the way. It stops when:
- a repository is found
- a ceiling directory was examined (ceilings equal to the start are ignored)
- the parent is on another device and crossing is not allowed
- the filesystem root was examined

Ancestors are visited strictly in order so a ceiling or device boundary at
one level prevents any look at the levels above it.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from gitdiscover.ceiling import CeilingSet
from gitdiscover.classify import inspect
from gitdiscover.errors import (
    CeilingExceeded,
    ClassificationError,
    FilesystemBoundaryCrossed,
    InaccessibleDirectory,
    NoMatchingCeilingDir,
    NotARepository,
)
from gitdiscover.gateway.filesystem.abc import Filesystem
from gitdiscover.gateway.filesystem.real import RealFilesystem
from gitdiscover.paths import PathNormalizer, strip_verbatim_prefix
from gitdiscover.realpath import realpath
from gitdiscover.types import DiscoveryOptions, Location

logger = logging.getLogger(__name__)


@dataclass
class Cursor:
    """Mutable position of one in-flight search.

    Attributes:
        directory: Directory currently examined (always absolute)
        device_id: Device the search started on
        height: Number of real parent transitions made so far
        remaining_height: Transitions left before the nearest ceiling, if any
    """

    directory: Path
    device_id: int
    height: int = 0
    remaining_height: int | None = None

    def ascend(self, parent: Path) -> None:
        # Only a real change of directory consumes height
        if parent == self.directory:
            return
        self.directory = parent
        self.height += 1
        if self.remaining_height is not None:
            self.remaining_height -= 1


class UpwardSearch:
    """One discovery run over a filesystem with fixed options."""

    def __init__(
        self,
        fs: Filesystem,
        options: DiscoveryOptions,
        *,
        check_devices: bool = os.name != "nt",
    ) -> None:
        """Create a search.

        Args:
            fs: Filesystem gateway
            options: Discovery options
            check_devices: Enforce the device boundary rule; device ids are
                not reliable on Windows, so git skips the check there
        """
        self._fs = fs
        self._options = options
        self._check_devices = check_devices

    def run(self, start: Path | str) -> Location:
        """Search upward from `start`.

        With `resolve_symlinks` the start is resolved component by component,
        so 'link/..' names the parent of the link's target, as a chdir would.
        Without it the path is only normalized lexically. Ceilings are
        compared in the same form as the start.

        Args:
            start: Directory to start from, relative to the cwd if relative

        Returns:
            Location of the enclosing repository

        Raises:
            InaccessibleDirectory: If `start` is not an existing directory
            NoMatchingCeilingDir: If ceiling matching is required and fails
            CeilingExceeded: If a ceiling was reached first
            FilesystemBoundaryCrossed: If the next parent is on another device
            NotARepository: If the filesystem root was reached
            SymlinkIndirectionLimitExceeded: If `start` cannot be resolved
            MissingParent: If `start` climbs above the filesystem root
            OSError: For filesystem failures other than an entry being absent
        """
        options = self._options
        ceilings = options.ceilings

        cwd = self._fs.get_cwd()
        normalizer = PathNormalizer(cwd)
        if options.resolve_symlinks:
            raw = strip_verbatim_prefix(os.fspath(start)) or os.curdir
            directory = normalizer.normalize(realpath(raw, cwd, options.max_symlinks, self._fs))
            ceilings = ceilings.resolved(self._fs, options.max_symlinks)
        else:
            directory = normalizer.normalize(start)

        start_entry = self._fs.stat(directory)
        if start_entry is None or not start_entry.is_dir:
            raise InaccessibleDirectory(directory=directory)

        if not options.allow_start_on_ceiling and ceilings.contains(directory):
            raise CeilingExceeded(directory=directory, ceiling=directory)

        ceiling_above = ceilings.closest_ancestor(directory)
        if options.require_ceiling_match and len(ceilings) > 0 and ceiling_above is None:
            raise NoMatchingCeilingDir(directory=directory, ceilings=ceilings.directories)

        cursor = Cursor(directory=directory, device_id=start_entry.device_id)
        if ceiling_above is not None:
            cursor.remaining_height = len(directory.parts) - len(ceiling_above.parts)

        last_failure: ClassificationError | None = None
        while True:
            try:
                location = inspect(cursor.directory, self._fs, dot_git_only=options.dot_git_only)
            except ClassificationError as e:
                logger.debug("Skipping %s: %s", cursor.directory, e)
                last_failure = e
                location = None

            if location is not None:
                logger.debug(
                    "Found %s at %s after %d step(s)",
                    location.kind.value,
                    location.git_dir,
                    cursor.height,
                )
                return location

            if self._at_ceiling(cursor, ceilings):
                logger.debug("Stopping at ceiling directory %s", cursor.directory)
                raise CeilingExceeded(
                    directory=cursor.directory, ceiling=cursor.directory, last_failure=last_failure
                )

            parent = cursor.directory.parent
            if parent == cursor.directory:
                raise NotARepository(
                    directory=cursor.directory, start=directory, last_failure=last_failure
                )

            if self._check_devices and not options.cross_fs:
                parent_entry = self._fs.stat(parent)
                if parent_entry is not None and parent_entry.device_id != cursor.device_id:
                    logger.debug("Stopping at filesystem boundary below %s", parent)
                    raise FilesystemBoundaryCrossed(
                        directory=cursor.directory,
                        boundary=parent,
                        start_device=cursor.device_id,
                        boundary_device=parent_entry.device_id,
                        last_failure=last_failure,
                    )

            cursor.ascend(parent)

    def _at_ceiling(self, cursor: Cursor, ceilings: CeilingSet) -> bool:
        if cursor.remaining_height is not None and cursor.remaining_height <= 0:
            return True
        return cursor.height > 0 and ceilings.contains(cursor.directory)


def discover(
    start: Path | str = ".",
    options: DiscoveryOptions | None = None,
    *,
    fs: Filesystem | None = None,
) -> Location:
    """Find the repository enclosing `start`.

    Args:
        start: Directory to start from (defaults to the current directory)
        options: Discovery options (defaults to DiscoveryOptions())
        fs: Filesystem gateway (defaults to RealFilesystem)

    Returns:
        Location of the enclosing repository

    Raises:
        DiscoveryError: If no repository could be found; see UpwardSearch.run
    """
    search = UpwardSearch(
        fs if fs is not None else RealFilesystem(),
        options if options is not None else DiscoveryOptions(),
    )
    return search.run(start)
