#!/usr/bin/env python3
"""
Command line entry point for the product search demo.

Commands:
1. generate - build a synthetic product catalog (JSON)
2. index    - load the catalog into OpenSearch
3. search   - run a search and print the first page
4. serve    - start the proxy/search API
"""

import argparse
import asyncio
import logging
import sys

import httpx
import uvicorn

from product_search.catalog import (
    bulk_index_products, create_index, generate_catalog, load_catalog,
    save_catalog, verify_indexing,
)
from product_search.catalog.generator import catalog_stats
from product_search.client import OpenSearchClient
from product_search.config import proxy_config, search_config
from product_search.models import PriceRange, SearchFilters, SearchParams, SortField, SortOrder
from product_search.search import SearchError, SearchService

logger = logging.getLogger("product_search")


async def generate(count: int, seed, path: str):
    """Generate the catalog and print summary statistics."""
    print(f"\n{'='*50}")
    print(f"Generating {count} products")
    print("=" * 50)

    products = generate_catalog(count, seed=seed)
    output_path = await save_catalog(products, path)
    stats = catalog_stats(products)

    print("\nCategories:")
    for category, n in stats["categories"].items():
        print(f"  {category}: {n} products")
    print("\nTop brands:")
    for brand, n in stats["brands"].items():
        print(f"  {brand}: {n} products")
    print("\nAvailability:")
    for status, n in stats["availability"].items():
        print(f"  {status}: {n} products")

    print(f"\nCatalog saved to: {output_path}")


async def index(path: str) -> int:
    """Recreate the index and bulk-load the catalog."""
    async with OpenSearchClient() as client:
        try:
            info = await client.info()
        except httpx.HTTPError as e:
            logger.error("Failed to connect to OpenSearch at %s: %s", client.config.url, e)
            return 1
        print(f"Connected to OpenSearch {info.get('version', {}).get('number', '?')}")

        products = await load_catalog(path)
        await create_index(client)
        report = await bulk_index_products(client, products)

        if report.errors:
            for error in report.errors[:10]:
                print(f"  {error}")
        print(f"Indexed {report.indexed}/{len(products)} products")

        result = await verify_indexing(client)
        print(f"Index verification: {result['doc_count']} documents indexed")
        print(f"Test search for '{result['sample_query']}' returned {result['sample_hits']} results")

    return 0 if report.success else 1


async def search(args) -> int:
    """Run one search and print the first page."""
    filters = SearchFilters(
        category=args.category,
        brand=args.brand,
        price_range=PriceRange(min=args.min_price, max=args.max_price)
        if args.min_price is not None or args.max_price is not None else None,
        rating=args.min_rating,
        availability=args.availability,
        tags=args.tag or None,
    )
    params = SearchParams(
        query=args.query,
        filters=filters,
        size=args.size,
        sort_by=args.sort,
        sort_order=args.order,
    )

    async with OpenSearchClient() as client:
        try:
            results = await SearchService(client).search(params)
        except SearchError as e:
            print(f"Search failed: {e}")
            return 1

    print(f"\n{results.total} products found ({results.took} ms)")
    for product in results.products:
        print(f"\n- {product.name}")
        print(f"  ID: {product.id}  Brand: {product.brand}  Category: {product.category}")
        print(f"  Price: {product.price:.2f} {product.currency}  Rating: {product.rating}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Product search demo")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a synthetic catalog")
    gen.add_argument("count", type=int, nargs="?", default=1000)
    gen.add_argument("--seed", type=int, default=None)
    gen.add_argument("--path", default=search_config.catalog_path)

    idx = sub.add_parser("index", help="Index the catalog into OpenSearch")
    idx.add_argument("--path", default=search_config.catalog_path)

    srch = sub.add_parser("search", help="Search products")
    srch.add_argument("query", nargs="?", default="")
    srch.add_argument("--category")
    srch.add_argument("--brand")
    srch.add_argument("--min-price", type=float)
    srch.add_argument("--max-price", type=float)
    srch.add_argument("--min-rating", type=float)
    srch.add_argument("--availability")
    srch.add_argument("--tag", action="append")
    srch.add_argument("--sort", choices=[f.value for f in SortField], default=None)
    srch.add_argument("--order", choices=[o.value for o in SortOrder], default="desc")
    srch.add_argument("--size", type=int, default=search_config.page_size)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=proxy_config.port)

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if args.command == "generate":
        asyncio.run(generate(args.count, args.seed, args.path))
        return 0
    if args.command == "index":
        return asyncio.run(index(args.path))
    if args.command == "search":
        return asyncio.run(search(args))

    uvicorn.run("product_search.api.main:app", host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
