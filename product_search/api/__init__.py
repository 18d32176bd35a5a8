"""HTTP API: engine proxy and search endpoints."""
