"""Schema export command."""

from pathlib import Path

import click
from strawberry.printer import print_schema

from gramps.cli.utils import error, success
from gramps.core.exceptions import GrampsError
from gramps.features.graphql.external_sources import load_dev_data_sources
from gramps.features.graphql.handler import gramps


@click.command()
@click.option(
    "--data-source",
    "-d",
    "data_sources",
    multiple=True,
    help="Data source to include (module path or filesystem path). Repeatable.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the SDL to a file instead of stdout",
)
def schema(data_sources: tuple[str, ...], output: Path | None) -> None:
    """Print the composed schema as SDL.

    Sources from GRAMPS_DATA_SOURCES are included as well.
    """
    try:
        sources = load_dev_data_sources(paths=list(data_sources))
        handler = gramps(data_sources=sources, enable_mock_data=False)
    except GrampsError as e:
        error(e.message)
        if e.description:
            error(e.description)
        raise SystemExit(1) from e

    sdl = print_schema(handler.schema)
    if output is None:
        click.echo(sdl)
        return

    output.write_text(sdl + "\n", encoding="utf-8")
    success(f"Schema written to {output}")
