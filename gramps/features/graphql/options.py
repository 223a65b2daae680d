"""Options for the libraries gramps drives.

Options are grouped by the step they configure, using the step name as key:

    {
        "make_executable_schema": {"extensions": [...]},       # strawberry.Schema kwargs
        "add_mock_functions_to_schema": {"preserve_resolvers": True},
        "graphql_router": {"graphql_ide": "apollo-sandbox"},   # GraphQLRouter kwargs
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = [
    "ADD_MOCK_FUNCTIONS",
    "GRAPHQL_ROUTER",
    "MAKE_EXECUTABLE_SCHEMA",
    "get_default_options",
]

MAKE_EXECUTABLE_SCHEMA = "make_executable_schema"
ADD_MOCK_FUNCTIONS = "add_mock_functions_to_schema"
GRAPHQL_ROUTER = "graphql_router"


def get_default_options(options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Extend the default options with the supplied ones.

    The merge is shallow: a supplied key replaces the default wholesale.

    Args:
        options: Options keyed by step name

    Returns:
        New dict with an entry for every step gramps always runs
    """
    return {
        MAKE_EXECUTABLE_SCHEMA: {},
        ADD_MOCK_FUNCTIONS: {},
        **(options or {}),
    }
