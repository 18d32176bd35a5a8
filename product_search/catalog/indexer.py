"""Bulk-load a product catalog into the search index."""

import json
import logging
from typing import Optional

import aiofiles
from pydantic import BaseModel, Field

from ..client import OpenSearchClient
from ..models import Product

logger = logging.getLogger(__name__)

INDEX_MAPPING = {
    "mappings": {
        "properties": {
            "id": {"type": "keyword"},
            "name": {
                "type": "text",
                "analyzer": "standard",
                "fields": {"keyword": {"type": "keyword"}},
            },
            "description": {"type": "text", "analyzer": "standard"},
            "category": {"type": "keyword", "fields": {"text": {"type": "text"}}},
            "subcategory": {"type": "keyword", "fields": {"text": {"type": "text"}}},
            "brand": {"type": "keyword", "fields": {"text": {"type": "text"}}},
            "price": {"type": "float"},
            "currency": {"type": "keyword"},
            "rating": {"type": "float"},
            "reviews_count": {"type": "integer"},
            "availability": {"type": "keyword"},
            "specifications": {"type": "object", "dynamic": True},
            "tags": {"type": "keyword"},
            "image_url": {"type": "keyword"},
        }
    },
    "settings": {
        "number_of_shards": 1,
        "number_of_replicas": 1,
    },
}


class IndexReport(BaseModel):
    """Outcome of a bulk indexing run."""

    indexed: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


async def load_catalog(path: str) -> list[Product]:
    """Read a JSON array of products."""
    async with aiofiles.open(path, "r", encoding="utf-8") as f:
        data = json.loads(await f.read())
    return [Product.model_validate(item) for item in data]


async def create_index(client: OpenSearchClient, mapping: Optional[dict] = None) -> dict:
    """(Re)create the index, dropping any existing one first."""
    if await client.index_exists():
        logger.info("Index '%s' already exists. Deleting...", client.index)
        await client.delete_index()

    logger.info("Creating index '%s'...", client.index)
    return await client.create_index(mapping or INDEX_MAPPING)


def build_bulk_actions(index: str, products: list[Product]) -> list[dict]:
    """Index action followed by the document source, per product."""
    actions = []
    for product in products:
        actions.append({"index": {"_index": index, "_id": product.id}})
        actions.append(product.model_dump())
    return actions


async def bulk_index_products(
    client: OpenSearchClient, products: list[Product], chunk_size: int = 500
) -> IndexReport:
    """Index products in chunks, collecting per-document errors."""
    report = IndexReport()

    for start in range(0, len(products), chunk_size):
        chunk = products[start : start + chunk_size]
        response = await client.bulk(build_bulk_actions(client.index, chunk))

        items = response.get("items", [])
        for product, item in zip(chunk, items):
            result = item.get("index", {})
            if result.get("error"):
                report.errors.append(f"{product.id}: {result['error']}")
            else:
                report.indexed += 1
        # Products the engine did not report on
        for product in chunk[len(items):]:
            report.errors.append(f"{product.id}: missing from bulk response")

        logger.info("Indexed %d/%d products", start + len(chunk), len(products))

    if report.errors:
        logger.error("Bulk indexing completed with %d errors", len(report.errors))
    return report


async def verify_indexing(client: OpenSearchClient, sample_query: str = "MacBook") -> dict:
    """Refresh the index and report its document count plus a sample query hit count."""
    await client.refresh()
    doc_count = await client.count()

    response = await client.search({"query": {"match": {"name": sample_query}}})
    total = response["hits"]["total"]
    hits = total["value"] if isinstance(total, dict) else total

    logger.info("Index verification: %d documents, '%s' matched %d", doc_count, sample_query, hits)
    return {"doc_count": doc_count, "sample_query": sample_query, "sample_hits": hits}
