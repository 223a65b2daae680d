"""Data source descriptors.

A data source bundles everything one backend contributes to the composed
schema: root-field resolvers, extra strawberry types, mock factories, and the
model exposed to resolvers through the request context.

Example:
    import strawberry

    @strawberry.type
    class Comic:
        num: int
        title: str

    def latest_comic_query(info: strawberry.Info) -> Comic:
        return info.context["xkcd"].get_latest()

    data_source = DataSource(
        namespace="XKCD",
        context="xkcd",
        model=XKCDModel(),
        queries=[latest_comic_query],
        mocks={"Comic": lambda: {"title": "Exploits of a Mom"}},
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from gramps.core.exceptions import DataSourceError

__all__ = ["DataSource", "coerce_data_source"]


@dataclass
class DataSource:
    """Container for a data source's GraphQL contribution.

    Attributes:
        namespace: Unique source name; dev sources replace sources with the same namespace
        context: Key of ``model`` in the per-request context (defaults to namespace)
        model: Backing model resolvers reach through ``info.context[context]``
        queries: Query resolver functions or strawberry fields
        mutations: Mutation resolver functions or strawberry fields
        subscriptions: Subscription resolver functions or strawberry fields
        types: Extra strawberry types to include in the schema
        mocks: Mock factories keyed by GraphQL type name
    """

    namespace: str
    context: str | None = None
    model: Any = None
    queries: list[Callable] = field(default_factory=list)
    mutations: list[Callable] = field(default_factory=list)
    subscriptions: list[Callable] = field(default_factory=list)
    types: list[type] = field(default_factory=list)
    mocks: dict[str, Callable[[], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, str) or not self.namespace.strip():
            raise DataSourceError(
                "Data source namespace must be a non-empty string",
                description=f"Got namespace={self.namespace!r}",
            )
        if self.context is None:
            self.context = self.namespace
        if not isinstance(self.context, str) or not self.context.strip():
            raise DataSourceError(
                f"Data source {self.namespace!r} needs a non-empty string context key",
                description=f"Got context={self.context!r}",
            )
        for name, value in self.mocks.items():
            if not callable(value):
                raise DataSourceError(
                    f"Mock for type {name!r} in data source {self.namespace!r} is not callable",
                )

    @property
    def resolver_count(self) -> int:
        """Total number of root fields this source contributes."""
        return len(self.queries) + len(self.mutations) + len(self.subscriptions)


_FIELD_NAMES = frozenset(f.name for f in fields(DataSource))


def coerce_data_source(obj: Any) -> DataSource:
    """Return ``obj`` as a DataSource.

    Accepts a DataSource or a mapping with DataSource keys.

    Raises:
        DataSourceError: If ``obj`` cannot describe a data source.
    """
    if isinstance(obj, DataSource):
        return obj
    if isinstance(obj, Mapping):
        unknown = set(obj) - _FIELD_NAMES
        if unknown:
            raise DataSourceError(
                f"Unknown data source keys: {', '.join(sorted(unknown))}",
            )
        if "namespace" not in obj:
            raise DataSourceError("Data source mapping is missing 'namespace'")
        return DataSource(**obj)
    raise DataSourceError(
        f"Expected a DataSource or mapping, got {type(obj).__name__}",
    )
