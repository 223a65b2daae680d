"""Data source composition settings.

Controls mock mode and local development data source overrides.
Environment variables use GRAMPS_ prefix.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

GrampsMode = Literal["mock", "live"]


class GrampsSettings(BaseSettings):
    """Gramps composition configuration.

    Environment variables use GRAMPS_ prefix.
    Example: GRAMPS_MODE=live, GRAMPS_DATA_SOURCES=./sources/xkcd,./sources/numbers
    """

    mode: GrampsMode = Field(
        default="mock",
        description="Schema mode: 'mock' adds mock resolvers, 'live' serves real resolvers only",
    )

    # Local development overrides
    data_sources: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description=(
            "Local data sources that replace configured sources with the same namespace. "
            "Dotted module paths or filesystem paths, comma separated."
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAMPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("data_sources", mode="before")
    @classmethod
    def _parse_data_sources(cls, value: Any) -> list[str]:
        """Parse data sources from JSON string or comma-separated list."""
        if isinstance(value, str):
            if value.startswith("["):
                return json.loads(value)
            return [s.strip() for s in value.split(",") if s.strip()]
        return value if value else []

    @property
    def enable_mock_data(self) -> bool:
        """Check if mock resolvers should be added to the schema."""
        return self.mode != "live"
