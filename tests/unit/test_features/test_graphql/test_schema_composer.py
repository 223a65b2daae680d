"""Unit tests for schema composition."""
from __future__ import annotations

import logging

import pytest
import strawberry
from strawberry.extensions import QueryDepthLimiter
from strawberry.printer import print_schema

from gramps.core.exceptions import SchemaBuildError
from gramps.features.graphql.data_source import DataSource
from gramps.features.graphql.schema_composer import (
    compose_mutation,
    compose_query,
    compose_subscription,
    get_schema,
)


def users_query() -> list[str]:
    return ["duplicate"]


@strawberry.field(description="Answers with pong")
def ping_resolver() -> str:
    return "pong"


def no_annotation_query():
    return 1


@strawberry.type
class Orphan:
    name: str


@pytest.mark.unit
class TestComposeRootTypes:
    """Test suite for Query/Mutation/Subscription composition."""

    def test_field_names_drop_suffix(self, users_source, posts_source):
        sdl = print_schema(get_schema([users_source, posts_source]))

        assert "user(id: ID!): User" in sdl
        assert "users: [User!]!" in sdl
        assert "latestPost: Post" in sdl
        assert "createUser(name: String!): User!" in sdl
        assert "postAdded: Post!" in sdl

    def test_strawberry_field_resolvers(self):
        source = DataSource(namespace="Ping", queries=[ping_resolver])

        schema = get_schema([source])
        result = schema.execute_sync("{ ping }")

        assert result.errors is None
        assert result.data == {"ping": "pong"}
        assert "Answers with pong" in print_schema(schema)

    def test_same_resolver_in_two_schemas(self):
        source = DataSource(namespace="Ping", queries=[ping_resolver])

        first = get_schema([source])
        second = get_schema([source])

        assert first.execute_sync("{ ping }").data == second.execute_sync("{ ping }").data

    def test_health_fallback_without_queries(self, caplog):
        query = compose_query([DataSource(namespace="Empty")])
        schema = strawberry.Schema(query=query)

        assert schema.execute_sync("{ health }").data == {"health": "ok"}
        assert "No queries found" in caplog.text

    def test_mutation_and_subscription_omitted_when_empty(self, users_source):
        assert compose_mutation([DataSource(namespace="Empty")]) is None
        assert compose_subscription([users_source]) is None

        sdl = print_schema(get_schema([users_source]))
        assert "type Mutation" in sdl
        assert "type Subscription" not in sdl

    def test_first_duplicate_wins(self, users_source, test_logger, caplog):
        other = DataSource(namespace="Other", queries=[users_query])

        with caplog.at_level(logging.WARNING, logger=test_logger.name):
            schema = get_schema([users_source, other], test_logger)

        assert "users: [User!]!" in print_schema(schema)
        assert "Duplicate Query field 'users' from data source 'Other'" in caplog.text
        assert "already defined by 'Users'" in caplog.text

    def test_unnamed_resolver_is_skipped(self, caplog):
        source = DataSource(namespace="Odd", queries=[ping_resolver, object()])

        with caplog.at_level(logging.WARNING):
            sdl = print_schema(get_schema([source]))

        assert "ping: String!" in sdl
        assert "cannot determine name" in caplog.text


@pytest.mark.unit
class TestGetSchema:
    """Test suite for get_schema."""

    def test_source_types_are_included(self, posts_source):
        sdl = print_schema(get_schema([posts_source]))

        assert "type Comment implements Node" in sdl
        assert "interface Node" in sdl

    def test_extra_types_option(self):
        source = DataSource(namespace="Ping", queries=[ping_resolver])

        sdl = print_schema(get_schema([source], options={"types": [Orphan]}))

        assert "type Orphan" in sdl

    def test_default_extensions(self):
        schema = get_schema([DataSource(namespace="Ping", queries=[ping_resolver])])

        assert any(isinstance(ext, QueryDepthLimiter) for ext in schema.extensions)

    def test_extensions_option_replaces_defaults(self):
        schema = get_schema(
            [DataSource(namespace="Ping", queries=[ping_resolver])],
            options={"extensions": []},
        )

        assert list(schema.extensions) == []

    def test_live_resolvers_read_context(self, users_source):
        schema = get_schema([users_source])

        result = schema.execute_sync(
            '{ user(id: "1") { name role } }',
            context_value={"users": users_source.model},
        )

        assert result.errors is None
        assert result.data == {"user": {"name": "Ada", "role": "ADMIN"}}

    def test_invalid_resolver_raises_schema_build_error(self, test_logger, caplog):
        source = DataSource(namespace="Broken", queries=[no_annotation_query])

        with pytest.raises(SchemaBuildError) as exc_info:
            get_schema([source], test_logger)

        assert exc_info.value.error_code == "GRAMPS_SCHEMA_BUILD_FAILED"
        assert exc_info.value.description
        assert exc_info.value.__cause__ is not None
        assert "Error creating schema" in caplog.text
