import logging

import click

from gitdiscover.cli.commands.classify_cmd import classify_cmd
from gitdiscover.cli.commands.discover_cmd import discover_cmd
from gitdiscover.cli.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitdiscover")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Locate and classify git repositories."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(discover_cmd)
cli.add_command(classify_cmd)


def main() -> None:
    """CLI entry point used by the `gitdiscover` console script."""
    cli()
