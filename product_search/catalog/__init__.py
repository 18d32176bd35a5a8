"""Catalog generation and indexing."""

from .generator import generate_catalog, save_catalog
from .indexer import bulk_index_products, create_index, load_catalog, verify_indexing

__all__ = [
    "bulk_index_products",
    "create_index",
    "generate_catalog",
    "load_catalog",
    "save_catalog",
    "verify_indexing",
]
