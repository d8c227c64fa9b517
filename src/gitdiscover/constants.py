"""Names and limits shared by the discovery modules."""

# Reserved metadata entry name; the only name the classifier probes for
DOT_GIT_DIR = ".git"

# Directory inside a superproject's git dir holding submodule git dirs
MODULES_DIR = "modules"

# First-line prefix of a pointer file (.git file of worktrees and submodules)
GITDIR_PREFIX = "gitdir: "

# Larger .git files are refused without being read, as git does
MAX_POINTER_FILE_SIZE = 1 << 20

# Files inside a git dir that the classifier looks at
HEAD_FILE = "HEAD"
INDEX_FILE = "index"
COMMONDIR_FILE = "commondir"
GITDIR_FILE = "gitdir"
OBJECTS_DIR = "objects"
REFS_DIR = "refs"

# Same bound as the kernel's MAXSYMLINKS on Linux
DEFAULT_MAX_SYMLINKS = 32

# Environment variables consumed by EnvironmentOptions
CEILING_DIRECTORIES_ENV = "GIT_CEILING_DIRECTORIES"
DISCOVERY_ACROSS_FILESYSTEM_ENV = "GIT_DISCOVERY_ACROSS_FILESYSTEM"
