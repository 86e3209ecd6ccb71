"""
Base data source interface.
"""

from abc import ABC, abstractmethod

from hnreader.services.client import ServiceClient


class BaseDataSource(ABC):
    """
    Abstract base class for all data sources.

    All data sources should:
    - Use ServiceClient for HTTP requests (timeout, retry, caching)
    - Return Pydantic models, or None for "not found"
    - Let single-request errors propagate to the caller
    """

    def __init__(self, client: ServiceClient, base_url: str):
        self.client = client
        self.base_url = base_url.rstrip("/")

    @property
    @abstractmethod
    def service_id(self) -> str:
        """Unique identifier for this data source."""
        ...

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    async def clear_cache(self) -> None:
        """Drop every cached response."""
        await self.client.clear_cache()

    def cache_size(self) -> int:
        """Number of cached responses."""
        return self.client.cache_size()
