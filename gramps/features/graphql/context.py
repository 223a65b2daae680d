"""Request-scoped GraphQL state.

The gramps middleware attaches a ``GrampsState`` to every request as
``request.state.gramps``. The GraphQL router reads the context and error
formatter from it, the same way resolvers read models from the context:

    @strawberry.field
    def latest_comic(info: strawberry.Info) -> Comic:
        return info.context["xkcd"].get_latest()
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import strawberry

    from gramps.features.graphql.data_source import DataSource
    from gramps.features.graphql.error_handler import ErrorFormatter

__all__ = ["STATE_KEY", "GrampsState", "build_context"]

# Attribute name on request.state / key in scope["state"]
STATE_KEY = "gramps"


@dataclass
class GrampsState:
    """Everything the GraphQL endpoint needs for one request.

    Attributes:
        schema: Composed executable schema
        context: Per-request mapping of context key to data source model
        format_error: Formatter applied to every error in the response
        graphql_options: ``graphql_router`` options passed to gramps()
    """

    schema: strawberry.Schema
    context: dict[str, Any]
    format_error: ErrorFormatter
    graphql_options: dict[str, Any] = field(default_factory=dict)


def build_context(
    sources: Sequence[DataSource], initial: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Fold the data source models into a context mapping.

    Starts from ``initial`` (the extra context) and sets
    ``context[source.context] = source.model`` for each source in order, so
    later sources win over earlier ones and over the extra context.
    """
    context = dict(initial or {})
    for source in sources:
        context[source.context] = source.model
    return context
