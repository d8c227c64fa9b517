"""Discovery options taken from git's environment variables.

The search itself never reads the environment. Callers capture the
relevant variables once with EnvironmentOptions.from_environ() and turn
them into DiscoveryOptions.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from gitdiscover.ceiling import CeilingSet
from gitdiscover.constants import CEILING_DIRECTORIES_ENV, DISCOVERY_ACROSS_FILESYSTEM_ENV
from gitdiscover.errors import InvalidEnvironmentValue
from gitdiscover.gateway.filesystem.abc import Filesystem
from gitdiscover.types import DiscoveryOptions

_TRUE_VALUES = frozenset({"true", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "no", "off", ""})


def parse_git_bool(name: str, value: str) -> bool:
    """Interpret a boolean the way git does for config and environment values.

    Accepts true/yes/on, false/no/off, the empty string (false) and integers
    (non-zero is true), case-insensitively.

    Raises:
        InvalidEnvironmentValue: For anything else
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    try:
        return int(lowered, 10) != 0
    except ValueError:
        raise InvalidEnvironmentValue(
            name=name, value=value, expected="a boolean (true/false, yes/no, on/off, 1/0)"
        ) from None


@dataclass(frozen=True)
class EnvironmentOptions:
    """Raw discovery settings captured from the environment.

    Attributes:
        ceiling_directories: Value of GIT_CEILING_DIRECTORIES, if set
        across_filesystem: Value of GIT_DISCOVERY_ACROSS_FILESYSTEM, if set
    """

    ceiling_directories: str | None = None
    across_filesystem: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "EnvironmentOptions":
        return cls(
            ceiling_directories=environ.get(CEILING_DIRECTORIES_ENV),
            across_filesystem=environ.get(DISCOVERY_ACROSS_FILESYSTEM_ENV),
        )

    def cross_fs(self) -> bool:
        """Whether crossing filesystem boundaries is allowed (default: no).

        Raises:
            InvalidEnvironmentValue: If the variable is set to a non-boolean
        """
        if self.across_filesystem is None:
            return False
        return parse_git_bool(DISCOVERY_ACROSS_FILESYSTEM_ENV, self.across_filesystem)

    def to_discovery_options(
        self,
        current_dir: Path,
        *,
        fs: Filesystem | None = None,
        base: DiscoveryOptions | None = None,
    ) -> DiscoveryOptions:
        """Build DiscoveryOptions from the captured values.

        Args:
            current_dir: Base for relative ceiling entries
            fs: Filesystem used to resolve symlinks in ceiling entries now; with
                None they are resolved by the search through its own filesystem
            base: Options to start from; ceilings and cross_fs are replaced

        Returns:
            DiscoveryOptions combining `base` with the environment
        """
        options = base if base is not None else DiscoveryOptions()
        ceilings = CeilingSet.build(
            self.ceiling_directories,
            current_dir,
            fs=fs,
            max_symlinks=options.max_symlinks,
        )
        return dataclasses.replace(options, ceilings=ceilings, cross_fs=self.cross_fs())
