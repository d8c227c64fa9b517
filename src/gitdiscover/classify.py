"""Classification of a single directory as a repository (or not).

A candidate directory is examined in two ways:
1. As a git dir itself (a bare repository, a directory inside which a
   search started, a submodule's git dir, a linked worktree's private dir)
2. Through its '.git' entry, which is either a git dir or a pointer file

Only the shape of the directory is inspected. Refs and objects are never
read; a git dir is recognized by a HEAD file plus either objects/ and refs/
or a commondir file.
"""

import logging
import os
from pathlib import Path

from gitdiscover import pointer_file
from gitdiscover.constants import (
    COMMONDIR_FILE,
    DOT_GIT_DIR,
    GITDIR_FILE,
    HEAD_FILE,
    INDEX_FILE,
    MAX_POINTER_FILE_SIZE,
    OBJECTS_DIR,
    REFS_DIR,
)
from gitdiscover.errors import ClassificationError, InvalidPointerTarget, MalformedPointerFile
from gitdiscover.gateway.filesystem.abc import Filesystem
from gitdiscover.gateway.filesystem.real import RealFilesystem
from gitdiscover.paths import PathNormalizer
from gitdiscover.types import Location, RepositoryKind

logger = logging.getLogger(__name__)


def is_git_dir(path: Path, fs: Filesystem) -> bool:
    """Whether `path` has the shape of a git directory."""
    entry = fs.stat(path)
    if entry is None or not entry.is_dir:
        return False
    if not _is_file(path / HEAD_FILE, fs):
        return False
    if _is_file(path / COMMONDIR_FILE, fs):
        return True
    return _is_dir(path / OBJECTS_DIR, fs) and _is_dir(path / REFS_DIR, fs)


def inspect(directory: Path, fs: Filesystem, *, dot_git_only: bool = False) -> Location | None:
    """Classify one absolute directory.

    Args:
        directory: Absolute, normalized directory to examine
        fs: Filesystem gateway
        dot_git_only: Skip testing `directory` itself as a git dir

    Returns:
        Location if `directory` is a repository, None if it is not

    Raises:
        MalformedPointerFile: If a .git file or worktree link file is unusable
        InvalidPointerTarget: If a .git file points at something that is not a git dir
        OSError: For filesystem failures other than an entry being absent
    """
    if not dot_git_only and is_git_dir(directory, fs):
        return _classify_git_dir(directory, fs)

    dot_git = directory / DOT_GIT_DIR
    entry = fs.stat(dot_git)
    if entry is None:
        return None

    if entry.is_dir:
        if not is_git_dir(dot_git, fs):
            logger.debug("Ignoring %s: directory does not look like a git dir", dot_git)
            return None
        return Location(git_dir=dot_git, work_dir=directory, kind=RepositoryKind.WORKING_TREE)

    if entry.is_file:
        if entry.size > MAX_POINTER_FILE_SIZE:
            raise MalformedPointerFile(
                path=dot_git,
                reason=f"file is too large ({entry.size} bytes, at most {MAX_POINTER_FILE_SIZE})",
            )
        return _classify_pointer(directory, dot_git, fs)

    logger.debug("Ignoring %s: neither a directory nor a regular file", dot_git)
    return None


def classify(directory: Path | str, fs: Filesystem | None = None) -> Location | None:
    """Classify a directory without walking upward.

    Unusable pointer files make the directory "not a repository" here;
    use inspect() to see why.

    Args:
        directory: Directory to examine, relative to the process cwd if relative
        fs: Filesystem gateway (defaults to RealFilesystem)

    Returns:
        Location if `directory` is a repository, None otherwise
    """
    filesystem = fs if fs is not None else RealFilesystem()
    normalized = PathNormalizer(filesystem.get_cwd()).normalize(directory)
    try:
        return inspect(normalized, filesystem)
    except ClassificationError as e:
        logger.debug("Cannot classify %s: %s", normalized, e)
        return None


def _classify_git_dir(git_dir: Path, fs: Filesystem) -> Location:
    if pointer_file.is_submodule_git_dir(git_dir):
        return Location(git_dir=git_dir, work_dir=None, kind=RepositoryKind.SUBMODULE_GIT_DIR)

    if _is_file(git_dir / COMMONDIR_FILE, fs):
        return Location(
            git_dir=git_dir,
            work_dir=_linked_work_dir(git_dir, fs),
            kind=RepositoryKind.LINKED_WORKING_TREE,
            common_dir=_common_dir(git_dir, fs),
        )

    if git_dir.name == DOT_GIT_DIR or _is_file(git_dir / INDEX_FILE, fs):
        return Location(git_dir=git_dir, work_dir=git_dir.parent, kind=RepositoryKind.WORKING_TREE)

    return Location(git_dir=git_dir, work_dir=None, kind=RepositoryKind.BARE)


def _classify_pointer(directory: Path, dot_git: Path, fs: Filesystem) -> Location | None:
    try:
        content = fs.read_bytes(dot_git)
    except FileNotFoundError:
        # Removed between stat and read
        return None

    target = pointer_file.resolve(dot_git, content)
    if not is_git_dir(target, fs):
        raise InvalidPointerTarget(path=dot_git, target=target)

    if _is_file(target / COMMONDIR_FILE, fs):
        return Location(
            git_dir=target,
            work_dir=directory,
            kind=RepositoryKind.LINKED_WORKING_TREE,
            common_dir=_common_dir(target, fs),
        )

    if pointer_file.is_submodule_git_dir(target):
        pointer_file.resolve(dot_git, content, submodule_safe=True)
        return Location(git_dir=target, work_dir=directory, kind=RepositoryKind.SUBMODULE)

    # Separate git dir, as created by `git init --separate-git-dir`
    return Location(git_dir=target, work_dir=directory, kind=RepositoryKind.WORKING_TREE)


def _common_dir(git_dir: Path, fs: Filesystem) -> Path:
    """Read the central metadata store a linked worktree's git dir refers to."""
    commondir = git_dir / COMMONDIR_FILE
    value = _read_first_line(commondir, fs)
    if not value:
        raise MalformedPointerFile(path=commondir, reason="commondir is empty")
    return Path(os.path.normpath(git_dir / value))


def _linked_work_dir(git_dir: Path, fs: Filesystem) -> Path | None:
    """Find the worktree a linked worktree's private git dir belongs to.

    The private dir's 'gitdir' file holds the path of the worktree's .git file.
    """
    backlink = git_dir / GITDIR_FILE
    if not _is_file(backlink, fs):
        return None
    value = _read_first_line(backlink, fs)
    if not value:
        return None
    return Path(os.path.normpath(git_dir / value)).parent


def _read_first_line(path: Path, fs: Filesystem) -> str:
    content = fs.read_bytes(path)
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedPointerFile(path=path, reason=f"content is not valid UTF-8 ({e.reason})") from e
    return text.split("\n", 1)[0].rstrip()


def _is_file(path: Path, fs: Filesystem) -> bool:
    entry = fs.stat(path)
    return entry is not None and entry.is_file


def _is_dir(path: Path, fs: Filesystem) -> bool:
    entry = fs.stat(path)
    return entry is not None and entry.is_dir
