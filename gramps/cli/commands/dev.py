"""Development server command."""

import os
import subprocess
import sys
from pathlib import Path

import click

from gramps.cli.utils import error, info, success, warning
from gramps.core.settings import get_app_settings, get_graphql_settings


def _normalize_source(entry: str) -> str:
    """Resolve filesystem entries so the server process finds them from any cwd."""
    path = Path(entry).expanduser()
    if path.exists():
        return str(path.resolve())
    return entry


def build_server_env(data_sources: tuple[str, ...], mock: bool) -> dict[str, str]:
    """Environment for the server process."""
    env = dict(os.environ)
    env["GRAMPS_MODE"] = "mock" if mock else "live"
    if data_sources:
        env["GRAMPS_DATA_SOURCES"] = ",".join(_normalize_source(s) for s in data_sources)
    return env


@click.command()
@click.option(
    "--data-source",
    "-d",
    "data_sources",
    multiple=True,
    help="Local data source to load (module path or filesystem path). Repeatable.",
)
@click.option(
    "--mock/--live",
    default=True,
    help="Serve mock data (default) or only the real resolvers",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind (default: from settings or 0.0.0.0)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind (default: from settings or 8080)",
)
@click.option(
    "--reload/--no-reload",
    default=True,
    help="Enable auto-reload on code changes",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Log level",
)
def dev(
    data_sources: tuple[str, ...],
    mock: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    log_level: str,
) -> None:
    """Run a development gateway serving local data sources."""
    settings = get_app_settings()
    host = host or settings.host
    port = port or settings.port

    if not data_sources and not os.environ.get("GRAMPS_DATA_SOURCES"):
        warning("No data sources given; the schema will only expose a health query.")

    info(f"GraphQL endpoint: http://{host}:{port}{get_graphql_settings().path}")
    info(f"Mode: {'mock' if mock else 'live'}")
    for source in data_sources:
        info(f"Data source: {source}")

    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "gramps.app.main:create_app",
        "--factory",
        "--host",
        host,
        "--port",
        str(port),
        "--log-level",
        log_level,
    ]
    if reload:
        cmd.append("--reload")

    success("Starting uvicorn...")
    try:
        result = subprocess.run(cmd, env=build_server_env(data_sources, mock), check=False)
    except KeyboardInterrupt:
        info("\nShutting down server...")
        return
    except OSError as e:
        error(f"Failed to start server: {e}")
        sys.exit(1)

    if result.returncode not in (0, -2):
        error(f"Server exited with status {result.returncode}")
        sys.exit(result.returncode)
