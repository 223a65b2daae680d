"""GraphQL endpoint configuration settings.

Controls the GraphQL endpoint, IDE, subscriptions, and query limits.
Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GraphQLIDE = Literal["graphiql", "apollo-sandbox", "pathfinder", False]


class GraphQLSettings(BaseSettings):
    """GraphQL endpoint configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_PATH=/graphql, GRAPHQL_MAX_QUERY_DEPTH=12
    """

    path: str = Field(
        default="/graphql",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="GraphQL endpoint path",
    )

    graphql_ide: GraphQLIDE = Field(
        default="graphiql",
        description="GraphQL IDE to use: graphiql, apollo-sandbox, pathfinder, or false to disable",
    )

    # Query limits for security
    max_query_depth: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum query nesting depth",
    )

    subscriptions_enabled: bool = Field(
        default=True,
        description="Enable GraphQL subscriptions (WebSocket)",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @field_validator("graphql_ide", mode="before")
    @classmethod
    def _parse_ide(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() in {"false", "none", "off", "0"}:
            return False
        return value

    @property
    def subscription_protocols(self) -> tuple[str, ...]:
        """WebSocket protocols to accept for subscriptions."""
        if not self.subscriptions_enabled:
            return ()
        return ("graphql-transport-ws", "graphql-ws")
