"""Global exception handlers for the gramps application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gramps.core.exceptions import GrampsError

logger = logging.getLogger(__name__)


async def gramps_exception_handler(request: Request, exc: GrampsError) -> JSONResponse:
    """Handle gramps exceptions raised outside GraphQL execution.

    Errors raised inside resolvers are formatted into the GraphQL response
    instead; this covers failures such as a missing middleware.

    Args:
        request: The FastAPI request object.
        exc: The gramps exception that was raised.

    Returns:
        JSONResponse shaped like a GraphQL error response.
    """
    logger.error(
        "Gramps exception occurred",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_code": exc.error_code,
            "error_id": exc.guid,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "data": None,
            "errors": [{"message": exc.message, "extensions": exc.to_extensions()}],
        },
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the application."""
    app.add_exception_handler(GrampsError, gramps_exception_handler)  # type: ignore[arg-type]
