"""Custom exception classes for gramps."""

from __future__ import annotations

import uuid
from typing import Any


class GrampsError(Exception):
    """Base gramps exception.

    All gramps exceptions inherit from this class. Raised from a resolver, it
    carries the details the GraphQL error formatter exposes to clients under
    ``extensions``.

    Attributes:
        error_code: Machine-readable error code.
        message: Human-readable error message.
        description: Longer explanation of what went wrong.
        graphql_model: Name of the model that raised the error.
        target_endpoint: Upstream endpoint involved in the failure.
        docs_link: URL of documentation relevant to the error.
        status_code: HTTP-like status code for the failure.
        guid: Unique identifier of this occurrence, for log correlation.

    Example:
        raise GrampsError(
            error_code="XKCD_COMIC_NOT_FOUND",
            message="No comic with that ID exists.",
            graphql_model="XKCDModel",
            target_endpoint="https://xkcd.com/99999/info.0.json",
            status_code=404,
        )
    """

    default_error_code = "GRAMPS_ERROR"
    default_message = "Something went wrong."

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        description: str | None = None,
        graphql_model: str | None = None,
        target_endpoint: str | None = None,
        docs_link: str | None = None,
        status_code: int = 500,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        self.description = description
        self.graphql_model = graphql_model
        self.target_endpoint = target_endpoint
        self.docs_link = docs_link
        self.status_code = status_code
        self.extra = extra or {}
        self.guid = uuid.uuid4().hex
        super().__init__(self.message)

    def to_extensions(self) -> dict[str, Any]:
        """Build the GraphQL ``extensions`` payload for this error."""
        extensions: dict[str, Any] = {
            "code": self.error_code,
            "description": self.description,
            "docsLink": self.docs_link,
            "graphqlModel": self.graphql_model,
            "targetEndpoint": self.target_endpoint,
            "statusCode": self.status_code,
            "errorId": self.guid,
        }
        if self.extra:
            extensions.update(self.extra)
        return extensions


class DataSourceError(GrampsError):
    """Raised when a data source descriptor is invalid."""

    default_error_code = "GRAMPS_INVALID_DATA_SOURCE"
    default_message = "Invalid data source."


class DataSourceLoadError(DataSourceError):
    """Raised when a local development data source cannot be imported.

    Example:
        raise DataSourceLoadError(path="./sources/xkcd", reason="No module named 'xkcd'")
    """

    default_error_code = "GRAMPS_DATA_SOURCE_LOAD_FAILED"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Unable to load data source from {path}: {reason}",
            extra={"path": path},
        )
        self.path = path


class SchemaBuildError(GrampsError):
    """Raised when the data sources cannot be combined into a schema."""

    default_error_code = "GRAMPS_SCHEMA_BUILD_FAILED"
    default_message = "Unable to build the executable schema."


class MockError(GrampsError):
    """Raised when a mock value cannot be produced for a GraphQL type."""

    default_error_code = "GRAMPS_MOCK_FAILED"

    def __init__(self, type_name: str) -> None:
        super().__init__(
            f"No mock defined for type {type_name!r}",
            extra={"typeName": type_name},
        )
        self.type_name = type_name
