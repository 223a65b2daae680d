"""FastAPI application factory for the gramps development gateway.

Run with uvicorn:
    uvicorn gramps.app.main:create_app --factory

Data sources are read from GRAMPS_DATA_SOURCES; mock mode from GRAMPS_MODE.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from fastapi import FastAPI

from gramps.app.exception_handlers import configure_exception_handlers
from gramps.app.middleware import GrampsMiddleware
from gramps.core.settings import get_app_settings, get_graphql_settings
from gramps.features.graphql.data_source import DataSource
from gramps.features.graphql.handler import ExtraContext, gramps
from gramps.features.graphql.router import create_graphql_router
from gramps.infra.logging import setup_logging


def create_app(
    data_sources: Iterable[DataSource | Mapping[str, Any]] = (),
    *,
    enable_mock_data: bool | None = None,
    extra_context: ExtraContext | None = None,
    options: Mapping[str, Any] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        data_sources: Data sources to serve in addition to GRAMPS_DATA_SOURCES
        enable_mock_data: Override GRAMPS_MODE
        extra_context: Extra per-request context entries
        options: Options passed through to gramps()

    Returns:
        Configured FastAPI application instance.
    """
    setup_logging()

    app_settings = get_app_settings()
    graphql_settings = get_graphql_settings()

    handler = gramps(
        data_sources=data_sources,
        enable_mock_data=enable_mock_data,
        extra_context=extra_context,
        options=options,
    )

    app = FastAPI(title=app_settings.title, debug=app_settings.debug)
    app.state.gramps_handler = handler

    configure_exception_handlers(app)
    app.add_middleware(GrampsMiddleware, gramps=handler)
    app.include_router(create_graphql_router(handler), prefix=graphql_settings.path)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "mode": "mock" if handler.mock_data_enabled else "live",
            "dataSources": [source.namespace for source in handler.sources],
        }

    return app
