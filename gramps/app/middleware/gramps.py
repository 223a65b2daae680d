"""ASGI middleware attaching the gramps state to each connection.

Performs the same work as calling the Gramps handler as an HTTP middleware
function, as a pure ASGI middleware that also covers WebSocket connections
(GraphQL subscriptions).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.requests import HTTPConnection

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from gramps.features.graphql.handler import Gramps


class GrampsMiddleware:
    """Attach schema, context and error formatter to every connection.

    The state is stored in ``scope["state"]["gramps"]`` and is readable as
    ``request.state.gramps``.

    Usage:
        handler = gramps(data_sources=[xkcd])
        app = FastAPI()
        app.add_middleware(GrampsMiddleware, gramps=handler)
    """

    def __init__(self, app: ASGIApp, gramps: Gramps) -> None:
        """Initialize middleware.

        Args:
            app: The ASGI application to wrap.
            gramps: Handler returned by gramps().
        """
        self.app = app
        self.gramps = gramps

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        await self.gramps.attach(HTTPConnection(scope))
        await self.app(scope, receive, send)
