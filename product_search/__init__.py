"""Product search over an OpenSearch index."""

__version__ = "1.0.0"
