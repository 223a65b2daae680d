"""gramps - combine GraphQL data sources into one executable schema.

    from fastapi import FastAPI
    from gramps import GrampsMiddleware, create_graphql_router, gramps

    handler = gramps(data_sources=[xkcd, numbers])
    app = FastAPI()
    app.add_middleware(GrampsMiddleware, gramps=handler)
    app.include_router(create_graphql_router(handler), prefix="/graphql")
"""

from __future__ import annotations

__version__ = "1.0.0"

from gramps.app.middleware.gramps import GrampsMiddleware
from gramps.core.exceptions import (
    DataSourceError,
    DataSourceLoadError,
    GrampsError,
    MockError,
    SchemaBuildError,
)
from gramps.features.graphql import DataSource, Gramps, GrampsState, gramps
from gramps.features.graphql.router import create_graphql_router

__all__ = [
    "DataSource",
    "DataSourceError",
    "DataSourceLoadError",
    "Gramps",
    "GrampsError",
    "GrampsMiddleware",
    "GrampsState",
    "MockError",
    "SchemaBuildError",
    "__version__",
    "create_graphql_router",
    "gramps",
]
