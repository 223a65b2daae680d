"""Main CLI entry point for gramps commands."""

import click

from gramps import __version__
from gramps.cli.commands.dev import dev
from gramps.cli.commands.schema import schema
from gramps.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="gramps")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """gramps - combine GraphQL data sources into one schema.

    \b
    Commands:
      dev     Run a development gateway for local data sources
      schema  Print the composed schema as SDL

    \b
    Quick Start:
      gramps dev -d ./my-data-source          # mock data on :8080/graphql
      gramps dev -d ./my-data-source --live   # real resolvers only
      gramps schema -d ./my-data-source       # print SDL
    """
    ctx.ensure_object(dict)


cli.add_command(dev)
cli.add_command(schema)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
