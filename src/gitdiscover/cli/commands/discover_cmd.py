"""Discover command: find the repository enclosing a directory."""

import dataclasses
from pathlib import Path

import click

from gitdiscover.ceiling import CeilingSet
from gitdiscover.cli.context import require_context
from gitdiscover.cli.output import echo_location, fail
from gitdiscover.environment import EnvironmentOptions
from gitdiscover.errors import DiscoveryError, InvalidEnvironmentValue, RealpathError
from gitdiscover.types import DiscoveryOptions
from gitdiscover.upwards import UpwardSearch


@click.command(name="discover")
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.option(
    "--ceiling",
    "ceilings",
    multiple=True,
    type=click.Path(path_type=Path),
    help="Do not search above this directory (repeatable, replaces GIT_CEILING_DIRECTORIES)",
)
@click.option(
    "--cross-fs/--no-cross-fs",
    default=None,
    help="Allow the search to continue onto other filesystems "
    "(default: GIT_DISCOVERY_ACROSS_FILESYSTEM, else no)",
)
@click.option(
    "--require-ceiling",
    is_flag=True,
    help="Fail unless the start lies beneath one of the ceiling directories",
)
@click.option(
    "--dot-git-only",
    is_flag=True,
    help="Only look for .git entries, never treat a directory itself as a bare repository",
)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def discover_cmd(
    ctx: click.Context,
    path: Path | None,
    ceilings: tuple[Path, ...],
    cross_fs: bool | None,
    require_ceiling: bool,
    dot_git_only: bool,
    json_output: bool,
) -> None:
    """Find the git repository enclosing PATH (default: current directory)."""
    cli_ctx = require_context(ctx)
    cwd = cli_ctx.fs.get_cwd()

    base = DiscoveryOptions(require_ceiling_match=require_ceiling, dot_git_only=dot_git_only)
    try:
        options = EnvironmentOptions.from_environ(cli_ctx.environ).to_discovery_options(
            cwd, fs=cli_ctx.fs, base=base
        )
    except InvalidEnvironmentValue as e:
        fail(str(e), json_output=json_output, error=e)

    if ceilings:
        options = dataclasses.replace(
            options,
            ceilings=CeilingSet.from_entries([str(c) for c in ceilings], cwd, fs=cli_ctx.fs),
        )
    if cross_fs is not None:
        options = dataclasses.replace(options, cross_fs=cross_fs)

    start = path if path is not None else Path(".")
    try:
        location = UpwardSearch(cli_ctx.fs, options).run(start)
    except (DiscoveryError, RealpathError) as e:
        fail(str(e), json_output=json_output, error=e)
    except OSError as e:
        fail(f"cannot examine {e.filename}: {e.strerror}", json_output=json_output, error=e)

    echo_location(location, json_output=json_output)
