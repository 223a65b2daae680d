"""Mock resolvers for local development.

``add_mock_functions`` rewrites the resolvers of an executable schema in
place so every field returns generated placeholder data. Data sources can
shape that data with mock factories keyed by GraphQL type name:

    mocks = {
        "Int": lambda: 42,
        "Comic": lambda: {"title": "Exploits of a Mom", "num": 327},
        "Query": lambda: {"latestComic": {"num": 1}},
    }

An object mock returns a dict of field values; fields it leaves out are
generated from their types. Values in the dict may be callables, which are
invoked when the field resolves.

With ``preserve_resolvers=True`` the real resolvers still run and mocks only
fill in fields whose resolver returned ``None``.
"""

from __future__ import annotations

import datetime
import decimal
import inspect
import logging
import random
import uuid
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from graphql import (
    GraphQLAbstractType,
    GraphQLField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLType,
    default_field_resolver,
    default_type_resolver,
    is_abstract_type,
    is_enum_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
)

from gramps.core.exceptions import MockError

if TYPE_CHECKING:
    import strawberry
    from graphql import GraphQLResolveInfo

    from gramps.features.graphql.data_source import DataSource

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_MOCKS", "MockObject", "MockStore", "add_mock_functions"]

MockFactory = Callable[[], Any]

# Number of items generated for list types
LIST_LENGTH = 2

DEFAULT_MOCKS: dict[str, MockFactory] = {
    "Int": lambda: random.randint(-100, 100),
    "Float": lambda: random.uniform(-100, 100),
    "String": lambda: "Hello World",
    "Boolean": lambda: random.random() > 0.5,
    "ID": lambda: str(uuid.uuid4()),
    # strawberry scalars
    "DateTime": lambda: datetime.datetime.now(datetime.timezone.utc),
    "Date": lambda: datetime.date.today(),
    "Time": lambda: datetime.datetime.now(datetime.timezone.utc).time(),
    "Decimal": lambda: decimal.Decimal(random.randint(-10000, 10000)) / 100,
    "UUID": uuid.uuid4,
    "JSON": dict,
    # Base64 serializes bytes itself
    "Base64": lambda: b"Hello World",
}


class MockObject(dict):
    """Field values of a mocked object, tagged with its concrete type name."""

    def __init__(self, typename: str, values: Mapping[str, Any] | None = None) -> None:
        super().__init__(values or {})
        self.typename = typename

    def __repr__(self) -> str:
        return f"MockObject({self.typename!r}, {dict.__repr__(self)})"


class MockStore:
    """Generates mock values for the types of one GraphQL schema."""

    def __init__(self, schema: GraphQLSchema, mocks: Mapping[str, MockFactory]) -> None:
        self.schema = schema
        self.mocks: dict[str, MockFactory] = {**DEFAULT_MOCKS, **mocks}

    def mock(self, type_: GraphQLType) -> Any:
        """Generate a value for ``type_``."""
        if is_non_null_type(type_):
            return self.mock(type_.of_type)
        if is_list_type(type_):
            return [self.mock(type_.of_type) for _ in range(LIST_LENGTH)]
        if is_object_type(type_) or is_abstract_type(type_):
            return self.fill({}, type_)

        named: GraphQLNamedType = type_  # type: ignore[assignment]
        if named.name in self.mocks:
            return self.mocks[named.name]()
        if is_enum_type(named):
            first = next(iter(named.values.values()))
            return first.value
        raise MockError(named.name)

    def fill(self, value: Any, type_: GraphQLType) -> Any:
        """Shape a user-supplied ``value`` to ``type_``.

        Mappings supplied for object or abstract types become MockObjects
        seeded with the type's own mock; other values pass through.
        """
        if value is None:
            return None
        if is_non_null_type(type_):
            return self.fill(value, type_.of_type)
        if is_list_type(type_):
            if isinstance(value, list | tuple):
                return [self.fill(item, type_.of_type) for item in value]
            return value
        if isinstance(value, MockObject) or not isinstance(value, Mapping):
            return value
        if is_object_type(type_):
            return MockObject(type_.name, {**self.seed(type_.name), **value})
        if is_abstract_type(type_):
            seed = {**self.seed(type_.name), **value}
            concrete = self._concrete_type(type_, seed.get("__typename"))
            return MockObject(concrete.name, {**self.seed(concrete.name), **seed})
        return value

    def seed(self, type_name: str) -> dict[str, Any]:
        factory = self.mocks.get(type_name)
        if factory is None:
            return {}
        seed = factory()
        if not isinstance(seed, Mapping):
            raise MockError(type_name)
        return dict(seed)

    def _concrete_type(
        self, abstract_type: GraphQLAbstractType, typename: str | None
    ) -> GraphQLObjectType:
        possible = self.schema.get_possible_types(abstract_type)
        if typename is not None:
            for candidate in possible:
                if candidate.name == typename:
                    return candidate
        if not possible:
            raise MockError(abstract_type.name)
        return possible[0]


def _merge(result: Any, mock: Callable[[], Any]) -> Any:
    if result is None:
        return mock()
    if isinstance(result, Mapping) and not isinstance(result, MockObject):
        mocked = mock()
        if isinstance(mocked, MockObject):
            return MockObject(mocked.typename, {**mocked, **result})
    return result


def _mock_resolver(
    store: MockStore,
    parent_type: GraphQLObjectType,
    field: GraphQLField,
    *,
    is_root: bool,
    preserve_resolvers: bool,
) -> Callable[..., Any]:
    original = field.resolve or default_field_resolver
    return_type = field.type

    def mock_value(source: Any, info: GraphQLResolveInfo) -> Any:
        if is_root and not isinstance(source, Mapping):
            source = store.seed(parent_type.name)
        if isinstance(source, Mapping) and info.field_name in source:
            value = source[info.field_name]
            if callable(value):
                value = value()
            return store.fill(value, return_type)
        return store.mock(return_type)

    def resolve(source: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        if preserve_resolvers and not isinstance(source, MockObject):
            result = original(source, info, **args)
            if inspect.isawaitable(result):
                return _merge_async(result, source, info)
            return _merge(result, lambda: mock_value(source, info))
        return mock_value(source, info)

    async def _merge_async(result: Any, source: Any, info: GraphQLResolveInfo) -> Any:
        return _merge(await result, lambda: mock_value(source, info))

    return resolve


def _mock_is_type_of(object_type: GraphQLObjectType) -> None:
    original = object_type.is_type_of
    if original is None:
        return

    def is_type_of(value: Any, info: GraphQLResolveInfo) -> Any:
        if isinstance(value, MockObject):
            return value.typename == object_type.name
        return original(value, info)

    object_type.is_type_of = is_type_of


def _mock_resolve_type(abstract_type: GraphQLAbstractType) -> None:
    original = abstract_type.resolve_type or default_type_resolver

    def resolve_type(value: Any, info: GraphQLResolveInfo, type_: GraphQLAbstractType) -> Any:
        if isinstance(value, MockObject):
            return value.typename
        return original(value, info, type_)

    abstract_type.resolve_type = resolve_type


def collect_mocks(
    sources: Sequence[DataSource], extra: Mapping[str, MockFactory] | None = None
) -> dict[str, MockFactory]:
    """Merge the mocks of all sources; later sources and ``extra`` win."""
    mocks: dict[str, MockFactory] = {}
    for source in sources:
        mocks.update(source.mocks)
    if extra:
        mocks.update(extra)
    return mocks


def add_mock_functions(
    schema: strawberry.Schema,
    sources: Sequence[DataSource],
    options: Mapping[str, Any] | None = None,
    log: logging.Logger = logger,
) -> strawberry.Schema:
    """Add mock resolvers to ``schema`` in place.

    Args:
        schema: Executable schema built by get_schema()
        sources: Data sources whose ``mocks`` shape the generated data
        options: ``mocks`` (overrides merged over the source mocks) and
            ``preserve_resolvers`` (keep real resolvers, mock only ``None``)
        log: Logger receiving mocking messages

    Returns:
        The same schema, for chaining
    """
    options = dict(options or {})
    preserve_resolvers = bool(options.get("preserve_resolvers", False))
    mocks = collect_mocks(sources, options.get("mocks"))

    graphql_schema: GraphQLSchema = schema._schema
    store = MockStore(graphql_schema, mocks)

    root_types = {
        t.name for t in (graphql_schema.query_type, graphql_schema.mutation_type) if t is not None
    }
    subscription_type = graphql_schema.subscription_type

    mocked_fields = 0
    for name, named_type in graphql_schema.type_map.items():
        if name.startswith("__"):
            continue
        if is_abstract_type(named_type):
            _mock_resolve_type(named_type)
            continue
        if not is_object_type(named_type) or named_type is subscription_type:
            continue

        _mock_is_type_of(named_type)
        for field in named_type.fields.values():
            field.resolve = _mock_resolver(
                store,
                named_type,
                field,
                is_root=name in root_types,
                preserve_resolvers=preserve_resolvers,
            )
            mocked_fields += 1

    log.info(
        "Added mock resolvers to %d fields (preserve_resolvers=%s, custom mocks: %s)",
        mocked_fields,
        preserve_resolvers,
        ", ".join(sorted(mocks)) or "none",
    )
    return schema
