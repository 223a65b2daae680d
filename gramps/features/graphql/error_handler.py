"""GraphQL error formatting.

``format_error(logger)`` builds the formatter attached to every request.
It logs resolver failures server-side and shapes what the client sees:

- Syntax and validation errors pass through unchanged.
- GrampsError failures expose their code, description, docs link, model,
  endpoint, status code and error id under ``extensions``.
- Any other exception is reported as ``INTERNAL_ERROR``; its message is
  masked when APP_ENVIRONMENT is ``production``.

Usage:
    formatter = format_error(logging.getLogger("gramps"))
    payload["errors"] = [formatter(error) for error in result.errors]
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Any

from graphql import GraphQLError, GraphQLFormattedError

from gramps.core.exceptions import GrampsError
from gramps.core.settings import get_app_settings

logger = logging.getLogger(__name__)

__all__ = ["INTERNAL_ERROR", "MASKED_MESSAGE", "ErrorFormatter", "format_error"]

INTERNAL_ERROR = "INTERNAL_ERROR"
MASKED_MESSAGE = "An internal error occurred. Please try again later."

ErrorFormatter = Callable[[GraphQLError], GraphQLFormattedError]


def _format_gramps_error(
    error: GraphQLError, original: GrampsError, log: logging.Logger
) -> GraphQLFormattedError:
    log.error(
        "%s: %s (errorId=%s, path=%s)",
        original.error_code,
        original.message,
        original.guid,
        error.path,
    )
    if original.description:
        log.error(original.description)
    if original.target_endpoint:
        log.error("Target endpoint: %s", original.target_endpoint)

    formatted = error.formatted
    formatted["message"] = original.message
    formatted["extensions"] = {
        **(formatted.get("extensions") or {}),
        **original.to_extensions(),
    }
    return formatted


def _format_internal_error(
    error: GraphQLError, original: BaseException, log: logging.Logger
) -> GraphQLFormattedError:
    error_id = uuid.uuid4().hex
    log.error(
        "Unhandled %s while resolving %s (errorId=%s): %s",
        type(original).__name__,
        error.path,
        error_id,
        original,
        exc_info=(type(original), original, original.__traceback__),
    )

    formatted = error.formatted
    if get_app_settings().is_production:
        formatted["message"] = MASKED_MESSAGE
    formatted["extensions"] = {
        **(formatted.get("extensions") or {}),
        "code": INTERNAL_ERROR,
        "errorId": error_id,
    }
    return formatted


def format_error(log: logging.Logger = logger) -> ErrorFormatter:
    """Build an error formatter that logs through ``log``.

    Args:
        log: Logger with ``error`` method; receives the server-side details

    Returns:
        Function turning a GraphQLError into a client-safe formatted error
    """

    def formatter(error: GraphQLError) -> GraphQLFormattedError:
        original: Any = error.original_error
        if original is None:
            return error.formatted
        if isinstance(original, GrampsError):
            return _format_gramps_error(error, original, log)
        return _format_internal_error(error, original, log)

    return formatter
