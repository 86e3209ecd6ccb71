"""
Display helpers for story listings.
"""

import time
from urllib.parse import urlparse


def get_domain(url: str | None) -> str:
    """Hostname of a story URL without a leading "www.", or "" if there is none."""
    if not url:
        return ""
    try:
        hostname = urlparse(url).hostname or ""
    except ValueError:
        return ""
    return hostname.removeprefix("www.")


def format_score(score: int | float) -> str:
    if score >= 1000:
        return f"{score / 1000:.1f}k"
    return str(int(score))


def get_time_ago(timestamp: int, now: float | None = None) -> str:
    """
    Human readable age of a Unix timestamp.

    Months are counted as 30 days and years as 365.
    """
    if now is None:
        now = time.time()
    seconds = int(now - timestamp)

    if seconds < 60:
        return "just now"

    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"

    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"

    days = hours // 24
    if days < 7:
        return f"{days}d ago"

    weeks = days // 7
    if weeks < 4:
        return f"{weeks}w ago"

    months = days // 30
    if months < 12:
        return f"{months}mo ago"

    return f"{days // 365}y ago"
