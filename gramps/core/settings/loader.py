"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from gramps.core.settings.loader import get_gramps_settings

    settings = get_gramps_settings()  # First call: loads and validates
    settings = get_gramps_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the caches to force reload:
    clear_all_caches()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .gramps import GrampsSettings
from .graphql import GraphQLSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_gramps_settings() -> GrampsSettings:
    """Get cached data source composition settings.

    Returns:
        Validated and frozen GrampsSettings instance.
    """
    return GrampsSettings()


@lru_cache(maxsize=1)
def get_graphql_settings() -> GraphQLSettings:
    """Get cached GraphQL endpoint settings.

    Returns:
        Validated and frozen GraphQLSettings instance.
    """
    return GraphQLSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful for testing or when you need to force reload settings.
    """
    get_app_settings.cache_clear()
    get_gramps_settings.cache_clear()
    get_graphql_settings.cache_clear()
    get_logging_settings.cache_clear()
