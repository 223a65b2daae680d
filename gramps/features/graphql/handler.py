"""Combine data sources, optionally add mocks, and build the request handler.

This is the core of gramps. ``gramps()`` accepts data sources and combines
them into a single schema and per-request context. Unless GRAMPS_MODE is
``live``, mock resolvers are added to the schema. The returned handler
attaches the schema, context and error formatter to every request as
``request.state.gramps``.

Additional options for each step can be passed in ``options`` using the
step's name as the key:

    gramps(
        data_sources=[xkcd, numbers],
        options={
            "add_mock_functions_to_schema": {"preserve_resolvers": True},
        },
    )

Usage with FastAPI:
    handler = gramps(data_sources=[xkcd])
    app.middleware("http")(handler)
    app.include_router(create_graphql_router(handler), prefix="/graphql")
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from gramps.core.settings import get_gramps_settings
from gramps.features.graphql.context import STATE_KEY, GrampsState, build_context
from gramps.features.graphql.data_source import DataSource, coerce_data_source
from gramps.features.graphql.error_handler import format_error
from gramps.features.graphql.external_sources import (
    load_dev_data_sources,
    override_local_sources,
)
from gramps.features.graphql.mocking import add_mock_functions
from gramps.features.graphql.options import (
    ADD_MOCK_FUNCTIONS,
    GRAPHQL_ROUTER,
    MAKE_EXECUTABLE_SCHEMA,
    get_default_options,
)
from gramps.features.graphql.schema_composer import get_schema

if TYPE_CHECKING:
    import strawberry
    from starlette.requests import HTTPConnection, Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)

__all__ = ["ExtraContext", "Gramps", "gramps"]

ExtraContext = Callable[
    ["HTTPConnection"], Mapping[str, Any] | Awaitable[Mapping[str, Any]]
]


def _no_extra_context(connection: HTTPConnection) -> dict[str, Any]:
    return {}


class Gramps:
    """Request handler holding the composed schema.

    Usable directly as an HTTP middleware function
    (``app.middleware("http")(handler)``) or through GrampsMiddleware.
    """

    def __init__(
        self,
        *,
        schema: strawberry.Schema,
        sources: list[DataSource],
        extra_context: ExtraContext,
        logger: logging.Logger,
        options: dict[str, Any],
        mock_data_enabled: bool,
    ) -> None:
        self.schema = schema
        self.sources = sources
        self.extra_context = extra_context
        self.logger = logger
        self.options = options
        self.mock_data_enabled = mock_data_enabled
        self.format_error = format_error(logger)

    @property
    def graphql_options(self) -> dict[str, Any]:
        """Options for the GraphQL router (``options["graphql_router"]``)."""
        return dict(self.options.get(GRAPHQL_ROUTER) or {})

    async def build_context(self, connection: HTTPConnection) -> dict[str, Any]:
        """Build the per-request context: extra context plus source models."""
        initial = self.extra_context(connection)
        if inspect.isawaitable(initial):
            initial = await initial
        return build_context(self.sources, initial)

    async def attach(self, connection: HTTPConnection) -> GrampsState:
        """Attach a fresh GrampsState to ``connection.state``.

        Returns:
            The attached state
        """
        state = GrampsState(
            schema=self.schema,
            context=await self.build_context(connection),
            format_error=self.format_error,
            graphql_options=self.graphql_options,
        )
        setattr(connection.state, STATE_KEY, state)
        return state

    async def __call__(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        await self.attach(request)
        return await call_next(request)

    def __repr__(self) -> str:
        namespaces = ", ".join(s.namespace for s in self.sources)
        return f"Gramps(sources=[{namespaces}], mock_data_enabled={self.mock_data_enabled})"


def gramps(
    *,
    data_sources: Iterable[DataSource | Mapping[str, Any]] = (),
    enable_mock_data: bool | None = None,
    extra_context: ExtraContext | None = None,
    logger: logging.Logger | None = None,
    options: Mapping[str, Any] | None = None,
) -> Gramps:
    """Combine data sources into one schema and return the request handler.

    Args:
        data_sources: Data sources to combine
        enable_mock_data: Add mock resolvers; defaults to GRAMPS_MODE != "live"
        extra_context: Called with each request; returns extra context entries
        logger: Logger with ``info`` and ``error`` methods
        options: Options for each step, keyed by step name

    Returns:
        Gramps request handler

    Raises:
        DataSourceError: If a data source is invalid
        DataSourceLoadError: If a GRAMPS_DATA_SOURCES entry cannot be loaded
        SchemaBuildError: If the sources cannot be combined
    """
    log = logger if logger is not None else logging.getLogger(__name__)
    if enable_mock_data is None:
        enable_mock_data = get_gramps_settings().enable_mock_data

    # Make sure every step has an options entry
    step_options = get_default_options(options)

    dev_sources = load_dev_data_sources(log)
    sources = override_local_sources(
        [coerce_data_source(source) for source in data_sources],
        dev_sources,
        log,
    )
    schema = get_schema(sources, log, step_options[MAKE_EXECUTABLE_SCHEMA])

    if enable_mock_data:
        add_mock_functions(schema, sources, step_options[ADD_MOCK_FUNCTIONS], log)

    return Gramps(
        schema=schema,
        sources=sources,
        extra_context=extra_context or _no_extra_context,
        logger=log,
        options=step_options,
        mock_data_enabled=enable_mock_data,
    )
