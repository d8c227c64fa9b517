"""Component-wise symlink resolution with a bounded number of links."""

import os
from collections import deque
from pathlib import Path

from gitdiscover.errors import EmptyPath, MissingParent, SymlinkIndirectionLimitExceeded
from gitdiscover.gateway.filesystem.abc import Filesystem


def realpath(path: Path | str, cwd: Path, max_symlinks: int, fs: Filesystem) -> Path:
    """Resolve every symlink in `path`, following at most `max_symlinks` links.

    Relative paths are resolved against `cwd`, which must be absolute.
    Components that do not exist are kept as they are, so a path without
    any symlinks comes back unchanged apart from '.'/'..' collapsing.

    Args:
        path: Path to resolve
        cwd: Base for relative paths and relative link targets
        max_symlinks: Maximum number of links to follow
        fs: Filesystem gateway used to detect and read links

    Returns:
        The resolved absolute path

    Raises:
        EmptyPath: If `path` is empty
        MissingParent: If a '..' component would leave the filesystem root
        SymlinkIndirectionLimitExceeded: If more than `max_symlinks` links are met
    """
    if not os.fspath(path):
        raise EmptyPath()
    path = Path(path)

    if path.is_absolute():
        real_path = Path(path.anchor)
        pending = deque(path.parts[1:])
    else:
        real_path = cwd
        pending = deque(path.parts)

    followed = 0
    while pending:
        part = pending.popleft()
        if part == ".":
            continue
        if part == "..":
            if real_path == real_path.parent:
                raise MissingParent(path=real_path)
            real_path = real_path.parent
            continue

        real_path = real_path / part
        entry = fs.lstat(real_path)
        if entry is None or not entry.is_symlink:
            continue

        followed += 1
        if followed > max_symlinks:
            raise SymlinkIndirectionLimitExceeded(path=path, max_symlinks=max_symlinks)
        target = fs.read_link(real_path)
        if target.is_absolute():
            real_path = Path(target.anchor)
            pending.extendleft(reversed(target.parts[1:]))
        else:
            real_path = real_path.parent
            pending.extendleft(reversed(target.parts))

    return real_path
