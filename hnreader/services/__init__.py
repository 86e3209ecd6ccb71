"""
Service layer infrastructure - resilience patterns for external API calls.

Provides:
- TTLCache: In-memory cache with per-entry expiry
- ServiceClient: Timed, retried and cached JSON requests
"""

from hnreader.services.errors import (
    ServiceError,
    HttpStatusError,
    InvalidResponseError,
    RequestTimeoutError,
    RetriesExhaustedError,
)
from hnreader.services.cache import TTLCache, CacheEntry, CacheStats
from hnreader.services.client import ServiceClient

__all__ = [
    # Errors
    "ServiceError",
    "HttpStatusError",
    "InvalidResponseError",
    "RequestTimeoutError",
    "RetriesExhaustedError",
    # Cache
    "TTLCache",
    "CacheEntry",
    "CacheStats",
    # Client
    "ServiceClient",
]
