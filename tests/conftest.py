"""Shared fixtures: a mocked search engine behind OpenSearchClient."""

import httpx
import pytest

from product_search.client import OpenSearchClient
from product_search.config import OpenSearchConfig

from tests.factories import ENGINE_URL


@pytest.fixture
def sample_aggregations():
    """Aggregations as returned for the standard facet request."""
    return {
        "categories": {"buckets": [{"key": "Electronics", "doc_count": 12}]},
        "brands": {"buckets": [{"key": "Apple", "doc_count": 7}, {"key": "Dell", "doc_count": 5}]},
        "price_ranges": {
            "buckets": [
                {"key": "0-100", "from": 0.0, "to": 100.0, "doc_count": 0},
                {"key": "1000-2000", "from": 1000.0, "to": 2000.0, "doc_count": 9},
                {"key": "2000+", "from": 2000.0, "doc_count": 3},
            ]
        },
        "availability": {"buckets": [{"key": "In Stock", "doc_count": 10}]},
    }


@pytest.fixture
def engine_config():
    """Engine config pointing at the mock transport."""
    return OpenSearchConfig(url=ENGINE_URL, index="products", username="", password="")


@pytest.fixture
async def make_client(engine_config):
    """Factory for started clients whose requests go to `handler`."""
    clients = []

    async def _make(handler) -> OpenSearchClient:
        client = OpenSearchClient(engine_config, transport=httpx.MockTransport(handler))
        await client.start()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.close()
