"""Dependencies shared by CLI commands."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

import click

from gitdiscover.gateway.filesystem.abc import Filesystem
from gitdiscover.gateway.filesystem.real import RealFilesystem


@dataclass(frozen=True)
class CliContext:
    """Gateways and environment for one CLI invocation.

    Tests pass their own instance as the click context object.
    """

    fs: Filesystem
    environ: Mapping[str, str]


def create_context() -> CliContext:
    return CliContext(fs=RealFilesystem(), environ=dict(os.environ))


def require_context(ctx: click.Context) -> CliContext:
    obj = ctx.find_object(CliContext)
    if obj is None:
        raise click.ClickException("CLI context was not initialized")
    return obj
