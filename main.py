"""
hnreader entry point
Prints one page of a Hacker News story list.
"""

import argparse
import asyncio
import sys
from datetime import timedelta

from loguru import logger

from hnreader.datasource.hackernews import Category, CategoryService, Story
from hnreader.datasource.hackernews.categories import DEFAULT_PAGE_SIZE
from hnreader.services import ServiceClient, ServiceError, TTLCache
from hnreader.settings import Settings, load_settings
from hnreader.utils import format_score, get_domain, get_time_ago


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List Hacker News stories.")
    parser.add_argument(
        "category",
        nargs="?",
        default=Category.TOP.value,
        choices=[c.value for c in Category],
        help="Story list to show (default: top)",
    )
    parser.add_argument(
        "--page", type=int, default=0, help="Zero-based page number (default: 0)"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Stories per page, 1-100 (default: {DEFAULT_PAGE_SIZE})",
    )
    return parser.parse_args(argv)


def format_story(story: Story) -> str:
    line = f"{format_score(story.score):>6} | {story.title}"
    domain = get_domain(story.url)
    if domain:
        line += f" ({domain})"
    return f"{line} - by {story.by}, {get_time_ago(story.time)}"


def build_client(settings: Settings) -> ServiceClient:
    cache = TTLCache(ttl=timedelta(seconds=settings.cache_ttl_seconds))
    return ServiceClient(
        cache=cache,
        timeout=settings.request_timeout,
        max_retries=settings.max_retries,
        base_delay=settings.retry_base_delay,
        max_delay=settings.retry_max_delay,
    )


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


async def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Entry point; returns the process exit code."""
    args = parse_args(argv)
    settings = settings or load_settings()

    async with build_client(settings) as client:
        service = CategoryService(client, base_url=settings.base_url)
        try:
            stories = await service.get_stories_by_category(
                args.category, page=args.page, limit=args.limit
            )
        except (ServiceError, ValueError) as e:
            logger.error(f"Could not load {args.category} stories: {e}")
            return 1

    if not stories:
        print("No stories.")
    for story in stories:
        print(format_story(story))
    return 0


if __name__ == "__main__":
    settings = load_settings()
    configure_logging(settings.log_level)
    sys.exit(asyncio.run(main(settings=settings)))
