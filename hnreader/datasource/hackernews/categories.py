"""
Category service for the Hacker News API.

Resolves the named story lists (top, new, ask, show, jobs) to ids and
loads one page of stories at a time. Stories in a page are fetched
concurrently; a story that fails is left out instead of failing the page.
"""

import asyncio
from enum import Enum
from typing import Any

from loguru import logger

from hnreader.datasource.base import BaseDataSource
from hnreader.datasource.hackernews.items import DEFAULT_BASE_URL, ItemRepository
from hnreader.datasource.hackernews.models import Comment, Item, Story
from hnreader.exceptions import ValidationError
from hnreader.services.client import ServiceClient
from hnreader.services.errors import InvalidResponseError

DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 100


class Category(str, Enum):
    """Story lists published by the API."""

    TOP = "top"
    NEW = "new"
    ASK = "ask"
    SHOW = "show"
    JOBS = "jobs"

    @property
    def cache_key(self) -> str:
        return CATEGORY_ENDPOINTS[self]

    @property
    def path(self) -> str:
        return f"/{CATEGORY_ENDPOINTS[self]}.json"


CATEGORY_ENDPOINTS = {
    Category.TOP: "topstories",
    Category.NEW: "newstories",
    Category.ASK: "askstories",
    Category.SHOW: "showstories",
    Category.JOBS: "jobstories",
}


def _is_valid_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class CategoryService(BaseDataSource):
    """
    Paginated story lists plus item lookups for thread traversal.

    Usage:
        cache = TTLCache()
        async with ServiceClient(cache=cache) as client:
            service = CategoryService(client)
            stories = await service.get_stories_by_category("top", page=0, limit=30)
    """

    SERVICE_ID = "hackernews"

    def __init__(
        self,
        client: ServiceClient,
        base_url: str = DEFAULT_BASE_URL,
        items: ItemRepository | None = None,
    ):
        super().__init__(client, base_url)
        self.items = items or ItemRepository(client, base_url)

    @property
    def service_id(self) -> str:
        return self.SERVICE_ID

    # Item lookups

    async def fetch_item(self, item_id: int) -> Item | None:
        return await self.items.fetch_item(item_id)

    async def fetch_story(self, story_id: int) -> Story | None:
        return await self.items.fetch_story(story_id)

    async def fetch_comment(self, comment_id: int) -> Comment | None:
        return await self.items.fetch_comment(comment_id)

    # Id lists

    async def fetch_story_ids(self, category: Category | str) -> list[int]:
        """
        Fetch the id list for a category.

        Raises:
            ValidationError: For an unknown category name
            InvalidResponseError: If the API did not return a list
        """
        category = self._resolve_category(category)

        data = await self.client.request(self._url(category.path), category.cache_key)

        if not isinstance(data, list):
            raise InvalidResponseError(
                f"Invalid response format for {category.value} stories: "
                f"expected a list, got {type(data).__name__}",
                service_id=self.service_id,
            )

        return [story_id for story_id in data if _is_valid_id(story_id)]

    async def fetch_top_stories(self) -> list[int]:
        return await self.fetch_story_ids(Category.TOP)

    async def fetch_new_stories(self) -> list[int]:
        return await self.fetch_story_ids(Category.NEW)

    async def fetch_ask_stories(self) -> list[int]:
        return await self.fetch_story_ids(Category.ASK)

    async def fetch_show_stories(self) -> list[int]:
        return await self.fetch_story_ids(Category.SHOW)

    async def fetch_job_stories(self) -> list[int]:
        return await self.fetch_story_ids(Category.JOBS)

    # Pages

    async def get_stories_by_category(
        self,
        category: Category | str,
        page: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[Story]:
        """
        Load one page of stories.

        Args:
            category: One of top, new, ask, show, jobs
            page: Zero-based page number
            limit: Stories per page, 1 to 100

        Returns:
            The stories of the page that loaded, in list order. Past the end
            of the list the page is empty.

        Raises:
            ValidationError: For a bad category, page or limit
            ServiceError: If the id list itself could not be fetched
        """
        category = self._resolve_category(category)
        if page < 0:
            raise ValidationError("Page number must be non-negative")
        if limit <= 0 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

        story_ids = await self.fetch_story_ids(category)

        start = page * limit
        page_ids = story_ids[start : start + limit]

        if not page_ids:
            logger.info(f"No more stories for page {page} in category {category.value}")
            return []

        logger.info(
            f"Fetching {len(page_ids)} stories for page {page} in category {category.value}"
        )

        # Fetch all stories in parallel; gather keeps input order
        results = await asyncio.gather(
            *(self._fetch_story_isolated(story_id) for story_id in page_ids)
        )
        stories = [story for story in results if story is not None]

        logger.info(f"Successfully loaded {len(stories)}/{len(page_ids)} stories")
        return stories

    async def _fetch_story_isolated(self, story_id: int) -> Story | None:
        """Fetch one story of a page, turning any failure into None."""
        try:
            return await self.items.fetch_story(story_id)
        except Exception as e:
            logger.error(f"Failed to fetch story {story_id}: {e}")
            return None

    @staticmethod
    def _resolve_category(category: Category | str) -> Category:
        try:
            return Category(category)
        except ValueError:
            raise ValidationError(f"Invalid category: {category}") from None
