"""Rendering of discovery results for the terminal and for scripts."""

import json
from dataclasses import asdict, dataclass
from typing import NoReturn

import click

from gitdiscover.errors import DiscoveryError
from gitdiscover.types import Location


@dataclass(frozen=True)
class LocationResult:
    """Success result with the discovered repository."""

    success: bool
    kind: str
    git_dir: str
    work_dir: str | None
    common_dir: str | None


@dataclass(frozen=True)
class ErrorResult:
    """Error result when no repository was found."""

    success: bool
    error: str
    directory: str | None


def location_result(location: Location) -> LocationResult:
    return LocationResult(
        success=True,
        kind=location.kind.value,
        git_dir=str(location.git_dir),
        work_dir=str(location.work_dir) if location.work_dir is not None else None,
        common_dir=str(location.common_dir) if location.common_dir is not None else None,
    )


def echo_location(location: Location, *, json_output: bool) -> None:
    result = location_result(location)
    if json_output:
        click.echo(json.dumps(asdict(result), indent=2))
        return

    click.echo(f"kind: {result.kind}")
    click.echo(f"git dir: {result.git_dir}")
    if result.work_dir is not None:
        click.echo(f"work dir: {result.work_dir}")
    if result.common_dir is not None:
        click.echo(f"common dir: {result.common_dir}")


def fail(message: str, *, json_output: bool, error: Exception | None = None) -> NoReturn:
    """Report an error and exit with status 1.

    Raises:
        SystemExit: Always
    """
    if json_output:
        directory = None
        if isinstance(error, DiscoveryError):
            directory = error.directory
        elif isinstance(error, OSError):
            directory = error.filename
        result = ErrorResult(
            success=False,
            error=message,
            directory=str(directory) if directory is not None else None,
        )
        click.echo(json.dumps(asdict(result), indent=2))
    else:
        click.echo(click.style("Error: ", fg="red") + message, err=True)
    raise SystemExit(1)
