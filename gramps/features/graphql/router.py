"""GraphQL router for FastAPI integration.

Serves the composed schema through strawberry's GraphQLRouter. The router
does not build any state itself: the gramps middleware must have attached a
GrampsState to the request, from which the router takes the context and
the error formatter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from starlette.requests import HTTPConnection
from strawberry.fastapi import GraphQLRouter

from gramps.core.exceptions import GrampsError
from gramps.core.settings import get_graphql_settings
from gramps.features.graphql.context import STATE_KEY, GrampsState

if TYPE_CHECKING:
    from starlette.requests import Request
    from strawberry.http import GraphQLHTTPResponse
    from strawberry.types import ExecutionResult

    from gramps.features.graphql.handler import Gramps

logger = logging.getLogger(__name__)

__all__ = ["GrampsGraphQLRouter", "create_graphql_router", "get_gramps_context", "get_gramps_state"]


def get_gramps_state(connection: HTTPConnection) -> GrampsState:
    """Return the GrampsState attached by the gramps middleware.

    Raises:
        GrampsError: If the middleware did not run for this request
    """
    state = getattr(connection.state, STATE_KEY, None)
    if state is None:
        raise GrampsError(
            "Gramps state missing from request; is the gramps middleware installed?",
            error_code="GRAMPS_NOT_CONFIGURED",
            status_code=500,
        )
    return state


async def get_gramps_context(connection: HTTPConnection) -> dict[str, Any]:
    """Provide the gramps context to strawberry.

    Strawberry merges the returned mapping with its standard ``request``,
    ``response`` and ``background_tasks`` entries.
    """
    return get_gramps_state(connection).context


class GrampsGraphQLRouter(GraphQLRouter):
    """GraphQLRouter that formats errors with the request's gramps formatter."""

    async def process_result(
        self, request: Request, result: ExecutionResult
    ) -> GraphQLHTTPResponse:
        formatter = get_gramps_state(request).format_error

        data: GraphQLHTTPResponse = {"data": result.data}
        if result.errors:
            data["errors"] = [formatter(error) for error in result.errors]
        if result.extensions:
            data["extensions"] = result.extensions
        return data


def create_graphql_router(handler: Gramps) -> GrampsGraphQLRouter:
    """Create the GraphQL router for a gramps handler.

    IDE and subscription protocols come from GRAPHQL_* settings; the
    handler's ``graphql_router`` options override them.

    Example:
        app.include_router(create_graphql_router(handler), prefix="/graphql")
    """
    settings = get_graphql_settings()
    router_options: dict[str, Any] = {
        "graphql_ide": settings.graphql_ide or None,
        "subscription_protocols": settings.subscription_protocols,
        **handler.graphql_options,
    }

    logger.debug(
        "Creating GraphQL router (ide=%s, subscriptions=%s)",
        router_options["graphql_ide"],
        bool(router_options["subscription_protocols"]),
    )
    return GrampsGraphQLRouter(
        handler.schema,
        context_getter=get_gramps_context,
        **router_options,
    )
