"""Pytest configuration and fixtures."""

import asyncio
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from universe.exceptions import FetchError
from universe.loading.fetcher import DocumentFetcher
from universe.models import TopicNode


def make_fetcher(
    documents: dict[str, dict[str, Any]],
    delays: dict[str, float] | None = None,
) -> DocumentFetcher:
    """Mock fetcher serving in-memory documents by URL.

    Unknown URLs fail with FetchError; delays (seconds per URL) let tests
    control completion order.
    """
    fetcher = MagicMock(spec=DocumentFetcher)
    delays = delays or {}

    async def fake_get(url: str) -> dict[str, Any]:
        if url in delays:
            await asyncio.sleep(delays[url])
        if url not in documents:
            raise FetchError(url, "not found")
        return documents[url]

    fetcher.get = AsyncMock(side_effect=fake_get)
    fetcher.close = AsyncMock()
    return fetcher


@pytest.fixture
def fetcher_factory() -> Callable[..., DocumentFetcher]:
    """Factory for in-memory fetchers."""
    return make_fetcher


@pytest.fixture
def split_documents() -> dict[str, dict[str, Any]]:
    """Root document referencing Y.json, as served under /data/en/."""
    return {
        "/data/en/universe.json": {
            "id": "Root",
            "group": 0,
            "children": [{"id": "X", "group": 1}, {"id": "Y.json"}],
        },
        "/data/en/Y.json": {
            "id": "Y",
            "group": 2,
            "children": [{"id": "Z", "group": 2}],
        },
    }


@pytest.fixture
def sample_tree() -> TopicNode:
    """
    Resolved sample universe:

        Root
        ├── Music ──(dashed)──> Math
        │   ├── Guitar
        │   │   ├── Fingerstyle
        │   │   └── Jazz ──(solid)──> Piano
        │   └── Piano
        ├── Math
        │   ├── Topology
        │   └── Graphs ──(dashed)──> Elsewhere (missing)
        └── Code
    """
    return TopicNode.from_dict({
        "id": "Root",
        "group": 0,
        "description": "Everything",
        "children": [
            {
                "id": "Music",
                "group": 1,
                "children": [
                    {
                        "id": "Guitar",
                        "group": 4,
                        "children": [
                            {"id": "Fingerstyle", "group": 4},
                            {
                                "id": "Jazz",
                                "group": 4,
                                "relations": [{"targetId": "Piano", "type": "solid"}],
                            },
                        ],
                    },
                    {"id": "Piano", "group": 1},
                ],
                "relations": [{"targetId": "Math", "label": "harmony"}],
            },
            {
                "id": "Math",
                "group": 2,
                "children": [
                    {"id": "Topology", "group": 2},
                    {
                        "id": "Graphs",
                        "group": 2,
                        "relations": [{"targetId": "Elsewhere", "type": "dashed"}],
                    },
                ],
            },
            {"id": "Code", "group": 3},
        ],
    })
