"""Parsing of 'gitdir: <path>' pointer files.

Linked worktrees and submodules replace their .git directory with a small
text file that redirects to the real git dir:

    gitdir: ../.git/modules/lib

Relative targets are relative to the directory holding the pointer file.
"""

import os
from pathlib import Path, PurePath

from gitdiscover.constants import DOT_GIT_DIR, GITDIR_PREFIX, MODULES_DIR
from gitdiscover.errors import MalformedPointerFile


def is_submodule_git_dir(git_dir: Path) -> bool:
    """Whether `git_dir` lives inside a superproject's modules store.

    True for '<super>/.git/modules/<name>' (and nested
    '.git/modules/a/modules/b'), never for a directory named '.git' itself.
    """
    if git_dir.name == DOT_GIT_DIR:
        return False
    parts = git_dir.parts[:-1]
    for index in range(len(parts) - 1, -1, -1):
        if parts[index] == DOT_GIT_DIR:
            return index + 1 < len(parts) and parts[index + 1] == MODULES_DIR
    return False


def resolve(pointer_file_path: Path, content: bytes | str, *, submodule_safe: bool = False) -> Path:
    """Parse a pointer file and return the absolute git dir it names.

    Args:
        pointer_file_path: Absolute path of the pointer file
        content: Raw file content; bytes must be valid UTF-8
        submodule_safe: Apply the stricter rules used for submodule pointers:
            no '..' once the target has descended into a directory, and the
            result must live inside a modules store

    Returns:
        Normalized absolute path of the target

    Raises:
        MalformedPointerFile: On bad encoding, missing prefix, empty target
            or, with submodule_safe, a target that escapes the modules store
    """
    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPointerFile(
                path=pointer_file_path, reason=f"content is not valid UTF-8 ({e.reason})"
            ) from e
    else:
        text = content

    first_line = text.split("\n", 1)[0]
    if not first_line.startswith(GITDIR_PREFIX):
        raise MalformedPointerFile(
            path=pointer_file_path, reason=f"expected first line to start with '{GITDIR_PREFIX}'"
        )
    raw_target = first_line[len(GITDIR_PREFIX) :].rstrip()
    if not raw_target:
        raise MalformedPointerFile(path=pointer_file_path, reason="gitdir target is empty")
    if "\0" in raw_target:
        raise MalformedPointerFile(path=pointer_file_path, reason="gitdir target contains NUL")

    target = Path(raw_target)
    if submodule_safe:
        _check_submodule_target(pointer_file_path, target)

    if not target.is_absolute():
        target = pointer_file_path.parent / target
    resolved = Path(os.path.normpath(target))

    if submodule_safe and not is_submodule_git_dir(resolved):
        raise MalformedPointerFile(
            path=pointer_file_path,
            reason=f"submodule target {resolved} is not inside a '{DOT_GIT_DIR}/{MODULES_DIR}' store",
        )
    return resolved


def _check_submodule_target(pointer_file_path: Path, target: PurePath) -> None:
    descended = False
    for part in target.parts[1:] if target.is_absolute() else target.parts:
        if part == "..":
            if descended:
                raise MalformedPointerFile(
                    path=pointer_file_path,
                    reason=f"submodule target {target} climbs out of a directory it entered",
                )
            continue
        if part != ".":
            descended = True
