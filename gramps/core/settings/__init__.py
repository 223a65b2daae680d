"""Modular Pydantic Settings v2 configuration.

One frozen settings model per domain, each read from its own environment
prefix and loaded through an LRU-cached getter:

    from gramps.core.settings import get_gramps_settings

    if get_gramps_settings().enable_mock_data:
        ...

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .app import AppSettings
from .gramps import GrampsSettings
from .graphql import GraphQLSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_gramps_settings,
    get_graphql_settings,
    get_logging_settings,
)
from .logs import LoggingSettings

__all__ = [
    "AppSettings",
    "GrampsSettings",
    "GraphQLSettings",
    "LoggingSettings",
    "clear_all_caches",
    "get_app_settings",
    "get_gramps_settings",
    "get_graphql_settings",
    "get_logging_settings",
]
