"""Root conftest: shared fixtures for all timeline tests.

Provides:
- anyio backend pinned to asyncio
- Mocked GitHub reader and aggregator
- API client with dependency overrides
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.services.github.read_operations import GitHubReadOperations
from app.services.github.types import ListPage
from app.services.timeline.aggregator import TimelineAggregator


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def mock_reader() -> AsyncMock:
    """GitHubReadOperations stand-in; every list call returns an empty last page."""
    reader = AsyncMock(spec=GitHubReadOperations)
    reader.list_commits.return_value = ListPage()
    reader.list_pull_requests.return_value = ListPage()
    reader.list_issues.return_value = ListPage()
    return reader


@pytest.fixture
def aggregator(mock_reader: AsyncMock) -> TimelineAggregator:
    return TimelineAggregator(mock_reader)


@pytest.fixture
async def api_client(aggregator: TimelineAggregator):
    """HTTP client against the app with the aggregator backed by mock_reader."""
    from app.api.deps import get_timeline_aggregator
    from app.main import app

    app.dependency_overrides[get_timeline_aggregator] = lambda: aggregator

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
