"""
hnreader - resilient async client for the Hacker News Firebase API.
"""

from hnreader.datasource.hackernews import (
    Category,
    CategoryService,
    Comment,
    Item,
    ItemRepository,
    Story,
)
from hnreader.services import ServiceClient, TTLCache

__all__ = [
    "Category",
    "CategoryService",
    "Comment",
    "Item",
    "ItemRepository",
    "ServiceClient",
    "Story",
    "TTLCache",
]
