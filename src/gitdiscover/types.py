"""Result and option types for repository discovery."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from gitdiscover.ceiling import CeilingSet
from gitdiscover.constants import DEFAULT_MAX_SYMLINKS
from gitdiscover.errors import AmbiguousClassification


class RepositoryKind(Enum):
    """The shape of a discovered repository."""

    BARE = "bare"
    WORKING_TREE = "working_tree"
    LINKED_WORKING_TREE = "linked_working_tree"
    SUBMODULE = "submodule"
    SUBMODULE_GIT_DIR = "submodule_git_dir"


# Kinds that always come with a working tree
_KINDS_WITH_WORK_DIR = frozenset(
    {RepositoryKind.WORKING_TREE, RepositoryKind.SUBMODULE}
)
# Kinds that never have one
_KINDS_WITHOUT_WORK_DIR = frozenset({RepositoryKind.BARE, RepositoryKind.SUBMODULE_GIT_DIR})


@dataclass(frozen=True)
class Location:
    """Where a repository lives and what kind it is.

    Attributes:
        git_dir: The metadata directory (refs, objects, config)
        work_dir: The checked-out tree, if the repository has one
        kind: Classification of the repository
        common_dir: Central metadata store of a linked worktree
    """

    git_dir: Path
    work_dir: Path | None
    kind: RepositoryKind
    common_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.kind in _KINDS_WITH_WORK_DIR and self.work_dir is None:
            raise AmbiguousClassification(f"{self.kind.value} at {self.git_dir} has no work dir")
        if self.kind in _KINDS_WITHOUT_WORK_DIR and self.work_dir is not None:
            raise AmbiguousClassification(
                f"{self.kind.value} at {self.git_dir} cannot have work dir {self.work_dir}"
            )
        if self.common_dir is not None and self.kind != RepositoryKind.LINKED_WORKING_TREE:
            raise AmbiguousClassification(
                f"only linked working trees have a common dir, got {self.kind.value}"
            )

    @property
    def path(self) -> Path:
        """The directory a user would call 'the repository'."""
        return self.work_dir if self.work_dir is not None else self.git_dir

    def into_repository_and_work_tree_directories(self) -> tuple[Path, Path | None]:
        return self.git_dir, self.work_dir


@dataclass(frozen=True)
class DiscoveryOptions:
    """Configuration for one upward search.

    Attributes:
        ceilings: Directories the search must not ascend past
        cross_fs: Whether the search may continue onto another device
        allow_start_on_ceiling: Whether a start directory that is itself a
            ceiling may be examined
        require_ceiling_match: Fail before searching when ceilings are
            configured but none lies above the start
        dot_git_only: Only probe '<dir>/.git', never '<dir>' as a bare repository
        resolve_symlinks: Resolve symlinks in the start directory before walking
        max_symlinks: Bound on symlinks followed while resolving
    """

    ceilings: CeilingSet = field(default_factory=CeilingSet.empty)
    cross_fs: bool = False
    allow_start_on_ceiling: bool = True
    require_ceiling_match: bool = False
    dot_git_only: bool = False
    resolve_symlinks: bool = True
    max_symlinks: int = DEFAULT_MAX_SYMLINKS
