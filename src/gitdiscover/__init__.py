"""Locate and classify the git repository enclosing a directory.

    from gitdiscover import discover

    location = discover("src/")
    location.kind       # RepositoryKind.WORKING_TREE
    location.git_dir    # /home/me/project/.git
    location.work_dir   # /home/me/project
"""

from gitdiscover.ceiling import CeilingSet
from gitdiscover.classify import classify
from gitdiscover.constants import DOT_GIT_DIR, MODULES_DIR
from gitdiscover.environment import EnvironmentOptions
from gitdiscover.types import DiscoveryOptions, Location, RepositoryKind
from gitdiscover.upwards import discover

__all__ = [
    "DOT_GIT_DIR",
    "MODULES_DIR",
    "CeilingSet",
    "DiscoveryOptions",
    "EnvironmentOptions",
    "Location",
    "RepositoryKind",
    "classify",
    "discover",
]
