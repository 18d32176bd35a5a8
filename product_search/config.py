"""Configuration management."""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:3000,"
    "http://localhost:3001,"
    "http://127.0.0.1:3000,"
    "http://127.0.0.1:3001"
)


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class OpenSearchConfig:
    """Search engine connection configuration."""

    url: str = os.getenv("OPENSEARCH_URL", "http://localhost:30920")
    index: str = os.getenv("OPENSEARCH_INDEX", "products")
    username: str = os.getenv("OPENSEARCH_USERNAME", "")
    password: str = os.getenv("OPENSEARCH_PASSWORD", "")
    verify_ssl: bool = os.getenv("OPENSEARCH_VERIFY_SSL", "false").lower() == "true"
    timeout: int = int(os.getenv("OPENSEARCH_TIMEOUT", "30"))

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        """Basic auth credentials, if configured."""
        if self.username and self.password:
            return (self.username, self.password)
        return None


@dataclass
class ProxyConfig:
    """Reverse proxy configuration."""

    port: int = int(os.getenv("PORT", "4000"))
    prefix: str = os.getenv("PROXY_PREFIX", "/api")
    allowed_origins: list[str] = field(
        default_factory=lambda: _split_csv(
            os.getenv("ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
        )
    )


@dataclass
class SearchConfig:
    """Search behaviour configuration."""

    page_size: int = int(os.getenv("SEARCH_PAGE_SIZE", "12"))
    suggest_delay: float = float(os.getenv("SUGGEST_DELAY", "0.3"))
    catalog_path: str = os.getenv("CATALOG_PATH", "data/products.json")


config = OpenSearchConfig()
proxy_config = ProxyConfig()
search_config = SearchConfig()
