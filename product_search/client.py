"""OpenSearch REST API client."""

import json
import logging
from typing import Any, Optional

import httpx

from .config import OpenSearchConfig, config as default_config

logger = logging.getLogger(__name__)


class OpenSearchClient:
    """Async client for the subset of the OpenSearch REST API used here.

    Construct one explicitly and pass it to whatever needs it; there is no
    shared module-level instance.
    """

    def __init__(
        self,
        config: Optional[OpenSearchConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or default_config
        self.index = self.config.index
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        """Initialize the HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self.config.url,
            timeout=self.config.timeout,
            auth=self.config.auth,
            verify=self.config.verify_ssl,
            headers={"Content-Type": "application/json"},
            transport=self._transport,
        )

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not started. Use 'async with' or call start() first.")
        return self._client

    async def search(self, body: dict) -> dict:
        """
        Run a search request against the configured index.

        Args:
            body: Query DSL request body

        Returns:
            The raw engine response
        """
        response = await self.client.post(f"/{self.index}/_search", json=body)
        response.raise_for_status()
        return response.json()

    async def get_document(self, doc_id: str) -> dict:
        """Fetch a single document by ID."""
        response = await self.client.get(f"/{self.index}/_doc/{doc_id}")
        response.raise_for_status()
        return response.json()

    async def info(self) -> dict:
        """Get cluster information (name, version)."""
        response = await self.client.get("/")
        response.raise_for_status()
        return response.json()

    async def index_exists(self) -> bool:
        """Check whether the configured index exists."""
        response = await self.client.head(f"/{self.index}")
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True

    async def create_index(self, body: dict) -> dict:
        """Create the configured index with the given settings and mappings."""
        response = await self.client.put(f"/{self.index}", json=body)
        response.raise_for_status()
        return response.json()

    async def delete_index(self) -> dict:
        """Delete the configured index."""
        response = await self.client.delete(f"/{self.index}")
        response.raise_for_status()
        return response.json()

    async def bulk(self, actions: list[dict]) -> dict:
        """
        Send a bulk request.

        Args:
            actions: Alternating action/metadata and source lines

        Returns:
            The bulk response, including per-item results
        """
        payload = "".join(json.dumps(line) + "\n" for line in actions)
        response = await self.client.post(
            "/_bulk",
            content=payload.encode("utf-8"),
            headers={"Content-Type": "application/x-ndjson"},
        )
        response.raise_for_status()
        return response.json()

    async def refresh(self) -> None:
        """Make recently indexed documents visible to search."""
        response = await self.client.post(f"/{self.index}/_refresh")
        response.raise_for_status()

    async def count(self) -> int:
        """Count documents in the configured index."""
        response = await self.client.get(f"/{self.index}/_count")
        response.raise_for_status()
        data: Any = response.json()
        return int(data.get("count", 0))
