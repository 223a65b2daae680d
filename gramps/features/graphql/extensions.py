"""Strawberry extensions for the composed schema.

Provides:
- Query depth limiting (GRAPHQL_MAX_QUERY_DEPTH)
"""

from __future__ import annotations

import logging

from strawberry.extensions import QueryDepthLimiter

from gramps.core.settings import get_graphql_settings

logger = logging.getLogger(__name__)


def get_extensions() -> list:
    """Get the default list of Strawberry extensions for the schema.

    Used when ``make_executable_schema`` options do not supply ``extensions``.

    Returns:
        List of extension instances
    """
    max_depth = get_graphql_settings().max_query_depth
    extensions = [
        QueryDepthLimiter(max_depth=max_depth),
    ]

    logger.debug("GraphQL extensions configured: depth limit=%d", max_depth)
    return extensions


__all__ = ["get_extensions"]
