"""
Item repository for the Hacker News API.

Fetches single nodes (/item/{id}.json) and narrows them to stories or
comments. A JSON null from the API means the id does not exist; it is
cached like any other answer and surfaces as None, never as an error.
"""

from loguru import logger

from hnreader.datasource.base import BaseDataSource
from hnreader.datasource.hackernews.models import (
    Comment,
    Item,
    Story,
    parse_comment,
    parse_item,
    parse_story,
)
from hnreader.exceptions import ValidationError
from hnreader.services.client import ServiceClient
from hnreader.services.errors import InvalidResponseError

DEFAULT_BASE_URL = "https://hacker-news.firebaseio.com/v0"


def item_cache_key(item_id: int) -> str:
    return f"item_{item_id}"


def validate_item_id(item_id: object) -> int:
    """Reject anything that is not a positive integer id."""
    if isinstance(item_id, bool) or not isinstance(item_id, int) or item_id <= 0:
        raise ValidationError(f"Invalid item ID: {item_id!r}")
    return item_id


class ItemRepository(BaseDataSource):
    """
    Hacker News item lookups.

    Network, timeout and HTTP errors from the ServiceClient propagate
    unchanged. Malformed stories and comments are logged and returned as
    None.
    """

    SERVICE_ID = "hackernews"

    def __init__(self, client: ServiceClient, base_url: str = DEFAULT_BASE_URL):
        super().__init__(client, base_url)

    @property
    def service_id(self) -> str:
        return self.SERVICE_ID

    async def fetch_item(self, item_id: int) -> Item | None:
        """
        Fetch any item by id.

        Returns:
            The Item, or None if the API has no item with this id

        Raises:
            ValidationError: If item_id is not a positive integer
            InvalidResponseError: If the payload is not a valid item
            ServiceError: If the request failed
        """
        item_id = validate_item_id(item_id)

        data = await self.client.request(
            self._url(f"/item/{item_id}.json"), item_cache_key(item_id)
        )

        if data is None:
            logger.info(f"Item {item_id} not found (API returned null)")
            return None

        result = parse_item(data)
        if not result.ok:
            raise InvalidResponseError(
                f"Item {item_id}: {result.error}", service_id=self.service_id
            )
        return result.value

    async def fetch_story(self, story_id: int) -> Story | None:
        """Fetch an item and validate it as a story. None if missing or malformed."""
        item = await self.fetch_item(story_id)
        if item is None:
            logger.info(f"Story {story_id} not found")
            return None

        result = parse_story(item)
        if not result.ok:
            logger.warning(f"Story {story_id} {result.error}, skipping")
            return None

        for warning in result.warnings:
            logger.warning(f"Story {story_id} {warning}")

        logger.debug(f'Successfully validated story {story_id}: "{result.value.title}"')
        return result.value

    async def fetch_comment(self, comment_id: int) -> Comment | None:
        """
        Fetch an item and validate it as a comment.

        Deleted or dead comments come back as placeholders with author
        "[deleted]" and no text, so a thread can still show where they were.
        """
        item = await self.fetch_item(comment_id)
        if item is None:
            return None

        if item.is_tombstoned:
            logger.info(f"Comment {comment_id} is deleted or dead")

        result = parse_comment(item)
        if not result.ok:
            logger.warning(f"Comment {comment_id} {result.error}, skipping")
            return None

        for warning in result.warnings:
            logger.warning(f"Comment {comment_id} {warning}")

        return result.value
