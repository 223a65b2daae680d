"""Schema composition from data sources.

Builds Query, Mutation, and Subscription types dynamically from the
resolvers of every data source, then wraps them in an executable
strawberry schema.

Field names come from the resolver's python name with the ``_query``,
``_mutation``, ``_subscription`` or ``_resolver`` suffix removed, so
``latest_comic_query`` is exposed as ``latestComic``.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import strawberry
from strawberry.types.field import StrawberryField

from gramps.core.exceptions import GrampsError, SchemaBuildError
from gramps.features.graphql.extensions import get_extensions

if TYPE_CHECKING:
    from gramps.features.graphql.data_source import DataSource

logger = logging.getLogger(__name__)

__all__ = ["compose_mutation", "compose_query", "compose_subscription", "get_schema"]

_ROOT_KINDS: dict[str, tuple[str, Callable[..., Any], str]] = {
    "queries": ("Query", strawberry.field, "_query"),
    "mutations": ("Mutation", strawberry.mutation, "_mutation"),
    "subscriptions": ("Subscription", strawberry.subscription, "_subscription"),
}


def _resolve_field(
    resolver: Any, wrap: Callable[..., Any], suffix: str
) -> tuple[str, StrawberryField] | None:
    """Return the root field name and a strawberry field for ``resolver``."""
    if isinstance(resolver, StrawberryField):
        # Copied so one source can be composed into several schemas
        name = resolver.python_name
        if not name and resolver.base_resolver is not None:
            name = resolver.base_resolver.name
        field_obj = copy.copy(resolver)
    elif callable(resolver) and hasattr(resolver, "__name__"):
        name = resolver.__name__
        field_obj = wrap(resolver)
    else:
        return None

    if not name:
        return None
    return name.removesuffix(suffix).removesuffix("_resolver"), field_obj


def _collect_fields(
    kind: str, sources: Sequence[DataSource], log: logging.Logger
) -> dict[str, StrawberryField]:
    type_name, wrap, suffix = _ROOT_KINDS[kind]
    methods: dict[str, StrawberryField] = {}
    owners: dict[str, str] = {}

    for source in sources:
        resolvers = getattr(source, kind)
        for resolver in resolvers:
            resolved = _resolve_field(resolver, wrap, suffix)
            if resolved is None:
                log.warning(
                    "Skipping %s resolver from data source '%s': cannot determine name for %r",
                    type_name,
                    source.namespace,
                    resolver,
                )
                continue

            field_name, field_obj = resolved
            if field_name in methods:
                log.warning(
                    f"Duplicate {type_name} field '{field_name}' from data source "
                    f"'{source.namespace}' (already defined by '{owners[field_name]}'). "
                    "Using first definition.",
                )
                continue

            methods[field_name] = field_obj
            owners[field_name] = source.namespace

        if resolvers:
            log.debug(
                f"Added {len(resolvers)} {kind} from data source '{source.namespace}'",
            )

    return methods


def _build_root_type(type_name: str, methods: Mapping[str, Any], description: str) -> type:
    # Annotations are left empty so strawberry takes each field's type from its resolver
    root = type(type_name, (), {**methods, "__annotations__": {}})
    return strawberry.type(root, description=description)


def compose_query(sources: Sequence[DataSource], log: logging.Logger = logger) -> type:
    """Compose the Query type from data source query resolvers.

    Returns:
        Strawberry Query type. When no source contributes a query, the type
        holds a single ``health`` field so the schema stays valid.

    Example:
        >>> query_type = compose_query([xkcd_source, numbers_source])
        >>> schema = strawberry.Schema(query=query_type)
    """
    query_methods: dict[str, Any] = _collect_fields("queries", sources, log)

    if not query_methods:
        log.warning("No queries found in data sources! Adding minimal health query.")

        @strawberry.field(description="Health check endpoint")
        def health() -> str:
            return "ok"

        query_methods["health"] = health

    log.info(
        f"Composed Query type with {len(query_methods)} fields "
        f"from {len(sources)} data sources: {', '.join(s.namespace for s in sources)}",
    )
    return _build_root_type("Query", query_methods, "Root query type")


def compose_mutation(
    sources: Sequence[DataSource], log: logging.Logger = logger
) -> type | None:
    """Compose the Mutation type from data source mutation resolvers.

    Returns:
        Strawberry Mutation type, or None if no source defines mutations
    """
    mutation_methods = _collect_fields("mutations", sources, log)
    if not mutation_methods:
        log.debug("No mutations defined by data sources")
        return None

    log.info(f"Composed Mutation type with {len(mutation_methods)} fields")
    return _build_root_type("Mutation", mutation_methods, "Root mutation type")


def compose_subscription(
    sources: Sequence[DataSource], log: logging.Logger = logger
) -> type | None:
    """Compose the Subscription type from data source subscription resolvers.

    Returns:
        Strawberry Subscription type, or None if no source defines subscriptions
    """
    subscription_methods = _collect_fields("subscriptions", sources, log)
    if not subscription_methods:
        log.debug("No subscriptions defined by data sources")
        return None

    log.info(f"Composed Subscription type with {len(subscription_methods)} fields")
    return _build_root_type("Subscription", subscription_methods, "Root subscription type")


def _unique(items: Iterable[type]) -> list[type]:
    seen: list[type] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def get_schema(
    sources: Sequence[DataSource],
    log: logging.Logger = logger,
    options: Mapping[str, Any] | None = None,
) -> strawberry.Schema:
    """Combine data sources into a single executable schema.

    Args:
        sources: Data sources to combine, in priority order
        log: Logger receiving composition messages
        options: Extra ``strawberry.Schema`` keyword arguments. ``types`` are
            added to the source types; ``extensions`` replace the defaults.

    Returns:
        Executable strawberry schema

    Raises:
        SchemaBuildError: If strawberry rejects the composed types
    """
    schema_options = dict(options or {})
    extensions = schema_options.pop("extensions", None)
    types = _unique(
        [t for source in sources for t in source.types]
        + list(schema_options.pop("types", ())),
    )

    try:
        schema = strawberry.Schema(
            query=compose_query(sources, log),
            mutation=compose_mutation(sources, log),
            subscription=compose_subscription(sources, log),
            types=types,
            extensions=get_extensions() if extensions is None else extensions,
            **schema_options,
        )
    except GrampsError:
        raise
    except Exception as e:
        log.error("Error creating schema: %s", e)
        raise SchemaBuildError(
            description=f"{type(e).__name__}: {e}",
        ) from e

    log.info("GraphQL schema created from %d data sources", len(sources))
    return schema
