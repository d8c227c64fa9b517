"""Exception taxonomy for repository discovery.

Three families:
- DiscoveryError: terminal outcomes of an upward search that found nothing
- ClassificationError: a candidate directory looked like a repository but
  its pointer file was unusable (the search keeps walking past these)
- RealpathError: symlink resolution failures

Filesystem errors other than "does not exist" are never wrapped; they
propagate as the OSError raised by the filesystem gateway.
"""

from pathlib import Path


class DiscoveryError(Exception):
    """Base class for searches that stopped without finding a repository.

    Attributes:
        directory: Last directory examined before the search stopped
        last_failure: Most recent classification failure seen on the way up, if any
    """

    def __init__(
        self,
        message: str,
        *,
        directory: Path,
        last_failure: "ClassificationError | None" = None,
    ) -> None:
        if last_failure is not None:
            message = f"{message} (last rejected candidate: {last_failure})"
        super().__init__(message)
        self.directory = directory
        self.last_failure = last_failure


class NotARepository(DiscoveryError):
    """Walked up to the filesystem root without finding a repository."""

    def __init__(
        self, *, directory: Path, start: Path, last_failure: "ClassificationError | None" = None
    ) -> None:
        super().__init__(
            f"not a git repository (or any of the parent directories): {start}",
            directory=directory,
            last_failure=last_failure,
        )
        self.start = start


class CeilingExceeded(DiscoveryError):
    """A ceiling directory was reached before a repository was found."""

    def __init__(
        self, *, directory: Path, ceiling: Path, last_failure: "ClassificationError | None" = None
    ) -> None:
        super().__init__(
            f"not a git repository (stopping at ceiling directory {ceiling}): {directory}",
            directory=directory,
            last_failure=last_failure,
        )
        self.ceiling = ceiling


class FilesystemBoundaryCrossed(DiscoveryError):
    """The parent directory lives on another device and crossing is disallowed."""

    def __init__(
        self,
        *,
        directory: Path,
        boundary: Path,
        start_device: int,
        boundary_device: int,
        last_failure: "ClassificationError | None" = None,
    ) -> None:
        super().__init__(
            f"not a git repository (stopping at filesystem boundary {directory}, "
            f"parent {boundary} is on another device; "
            "set GIT_DISCOVERY_ACROSS_FILESYSTEM to allow crossing)",
            directory=directory,
            last_failure=last_failure,
        )
        self.boundary = boundary
        self.start_device = start_device
        self.boundary_device = boundary_device


class NoMatchingCeilingDir(DiscoveryError):
    """Ceiling matching was required but no ceiling lies above the start."""

    def __init__(self, *, directory: Path, ceilings: tuple[Path, ...]) -> None:
        listed = ", ".join(str(c) for c in ceilings)
        super().__init__(
            f"{directory} is not beneath any of the ceiling directories: {listed}",
            directory=directory,
        )
        self.ceilings = ceilings


class InaccessibleDirectory(DiscoveryError):
    """The start of the search is missing or is not a directory."""

    def __init__(self, *, directory: Path) -> None:
        super().__init__(f"cannot search from {directory}: not an existing directory", directory=directory)


class ClassificationError(Exception):
    """A candidate could not be classified although it carries a .git entry."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class MalformedPointerFile(ClassificationError):
    """A .git file is not a valid 'gitdir: <path>' pointer."""

    def __init__(self, *, path: Path, reason: str) -> None:
        super().__init__(f"invalid gitfile format in {path}: {reason}", path=path)
        self.reason = reason


class InvalidPointerTarget(ClassificationError):
    """A pointer file points at something that is not a git directory."""

    def __init__(self, *, path: Path, target: Path) -> None:
        super().__init__(f"{path} points to {target}, which is not a git directory", path=path)
        self.target = target


class RealpathError(Exception):
    """Base class for symlink resolution failures."""


class EmptyPath(RealpathError):
    """An empty path cannot be resolved."""

    def __init__(self) -> None:
        super().__init__("empty path is not a valid path")


class MissingParent(RealpathError):
    """A '..' component tried to leave the filesystem root."""

    def __init__(self, *, path: Path) -> None:
        super().__init__(f"parent component of {path} does not exist")
        self.path = path


class SymlinkIndirectionLimitExceeded(RealpathError):
    """More than the allowed number of symlinks were followed."""

    def __init__(self, *, path: Path, max_symlinks: int) -> None:
        super().__init__(
            f"too many levels of symbolic links resolving {path} "
            f"(at most {max_symlinks} are followed)"
        )
        self.path = path
        self.max_symlinks = max_symlinks


class AmbiguousClassification(Exception):
    """A Location was assembled with fields that contradict its kind.

    Classification produces exactly one kind per success, so this signals
    an internal bug rather than a property of the directory being examined.
    """


class InvalidEnvironmentValue(Exception):
    """An environment variable holds a value that cannot be interpreted."""

    def __init__(self, *, name: str, value: str, expected: str) -> None:
        super().__init__(f"bad value '{value}' for {name}: expected {expected}")
        self.name = name
        self.value = value
