"""
Hacker News data source: item lookups and paginated story lists.
"""

from hnreader.datasource.hackernews.categories import Category, CategoryService
from hnreader.datasource.hackernews.items import ItemRepository
from hnreader.datasource.hackernews.models import (
    Comment,
    Item,
    ParseResult,
    Story,
    parse_comment,
    parse_item,
    parse_story,
)

__all__ = [
    "Category",
    "CategoryService",
    "Comment",
    "Item",
    "ItemRepository",
    "ParseResult",
    "Story",
    "parse_comment",
    "parse_item",
    "parse_story",
]
