"""Pytest configuration and shared fixtures.

Organization:
    - Environment Fixtures: isolated GRAMPS_/APP_/GRAPHQL_/LOG_ settings
    - Data Source Fixtures: sample sources from tests/fixtures/sources
    - Application Fixtures: FastAPI app and HTTP client
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from gramps import DataSource
from gramps.core.settings import clear_all_caches
from gramps.infra.logging import setup_logging

# Quiet defaults for the test run
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")

# Configure once up front so app factories never replace caplog handlers mid-test
setup_logging()

FIXTURE_SOURCES = Path(__file__).parent / "fixtures" / "sources"

_SETTINGS_PREFIXES = ("GRAMPS_", "GRAPHQL_")


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop gramps settings from the environment and reset settings caches.

    Tests that need a setting set it with ``monkeypatch.setenv`` and then
    call ``clear_all_caches()`` (or rely on this fixture's initial clear).
    """
    for key in list(os.environ):
        if key.startswith(_SETTINGS_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def fixture_sources() -> Path:
    """Directory holding the sample data source modules."""
    return FIXTURE_SOURCES


@pytest.fixture
def test_logger() -> logging.Logger:
    """Logger handed to gramps() in tests; capture it with caplog."""
    return logging.getLogger("gramps.tests")


# ============================================================================
# Data Source Fixtures
# ============================================================================


@pytest.fixture
def users_source() -> DataSource:
    """Fresh Users data source (queries, a mutation and a User mock)."""
    from tests.fixtures.sources.users import make_data_source

    return make_data_source()


@pytest.fixture
def posts_source() -> DataSource:
    """Fresh Posts data source (interface types, async resolvers, a subscription)."""
    from tests.fixtures.sources.posts import make_data_source

    return make_data_source()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def mock_app(users_source: DataSource, posts_source: DataSource):
    """Gateway app serving the sample sources with mock data."""
    from gramps.app.main import create_app

    return create_app([users_source, posts_source], enable_mock_data=True)


@pytest.fixture
def live_app(users_source: DataSource, posts_source: DataSource):
    """Gateway app serving the sample sources with their real resolvers."""
    from gramps.app.main import create_app

    return create_app(
        [users_source, posts_source],
        enable_mock_data=False,
        extra_context=lambda connection: {"requestPath": connection.url.path},
    )


@pytest.fixture
async def mock_client(mock_app) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the mock-mode app."""
    async with AsyncClient(transport=ASGITransport(app=mock_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def live_client(live_app) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the live-mode app."""
    async with AsyncClient(transport=ASGITransport(app=live_app), base_url="http://test") as ac:
        yield ac
