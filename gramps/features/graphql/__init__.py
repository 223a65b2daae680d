"""GraphQL data source composition using Strawberry.

Combines data sources into a single schema with:
- Root types composed from every source's resolvers
- Mock resolvers for local development (GRAMPS_MODE=mock)
- Local data source overrides (GRAMPS_DATA_SOURCES)
- A per-request context mapping context keys to source models
"""

from __future__ import annotations

from gramps.features.graphql.context import GrampsState, build_context
from gramps.features.graphql.data_source import DataSource, coerce_data_source
from gramps.features.graphql.error_handler import format_error
from gramps.features.graphql.handler import Gramps, gramps
from gramps.features.graphql.options import get_default_options

__all__ = [
    "DataSource",
    "Gramps",
    "GrampsState",
    "build_context",
    "coerce_data_source",
    "format_error",
    "get_default_options",
    "gramps",
]
