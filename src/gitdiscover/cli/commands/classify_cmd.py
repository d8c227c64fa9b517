"""Classify command: report what kind of repository a single directory is."""

from pathlib import Path

import click

from gitdiscover.classify import inspect
from gitdiscover.cli.context import require_context
from gitdiscover.cli.output import echo_location, fail
from gitdiscover.errors import ClassificationError
from gitdiscover.paths import PathNormalizer


@click.command(name="classify")
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
@click.pass_context
def classify_cmd(ctx: click.Context, path: Path, json_output: bool) -> None:
    """Classify PATH without searching its parents."""
    cli_ctx = require_context(ctx)
    directory = PathNormalizer(cli_ctx.fs.get_cwd()).normalize(path)

    try:
        location = inspect(directory, cli_ctx.fs)
    except ClassificationError as e:
        fail(f"{directory} is not a usable repository: {e}", json_output=json_output, error=e)
    except OSError as e:
        fail(f"cannot examine {e.filename}: {e.strerror}", json_output=json_output, error=e)

    if location is None:
        fail(f"not a git repository: {directory}", json_output=json_output)

    echo_location(location, json_output=json_output)
