"""Turn raw content entries into Post records.

The publish date and slug are encoded in the storage path
(``2024/2024-03-05-my-post``), never read from frontmatter, so ordering always
follows the physical layout of the content directory.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import date
from typing import Any

from postloom.core.exceptions import MalformedEntryError, MalformedPathError
from postloom.core.types import Category, ContentEntry, Post, ReadingTime, Tag

logger = logging.getLogger(__name__)

PATH_RE = re.compile(r"^[0-9]{4}/([0-9]{4})-([0-9]{2})-([0-9]{2})-([^/\s]+?)(?:/index\.[A-Za-z0-9]+)?$")


def parse_path(path: str) -> tuple[date, str]:
    """Extract the publish date and slug from a storage path.

    Raises:
        MalformedPathError: If the path does not have the expected shape or
            names an impossible calendar date.

    """
    match = PATH_RE.fullmatch(path)
    if match is None:
        raise MalformedPathError(path)
    year, month, day, slug = match.groups()
    try:
        published = date(int(year), int(month), int(day))
    except ValueError as e:
        raise MalformedPathError(path, str(e)) from e
    return published, slug


def _as_names(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def parse_entry(entry: ContentEntry) -> Post:
    """Build a Post from one content entry.

    Raises:
        MalformedPathError: If the entry path cannot be parsed.
        MalformedEntryError: If the frontmatter has no title.

    """
    published, slug = parse_path(entry.path)
    data = entry.data

    title = data.get("title")
    if not title:
        raise MalformedEntryError(entry.path, "missing 'title'")

    featured_image = data.get("featuredImage", data.get("featured_image"))
    return Post(
        slug=slug,
        title=str(title),
        excerpt=str(data.get("excerpt") or ""),
        published_date=published,
        categories=[Category.from_name(name) for name in _as_names(data.get("categories"))],
        tags=[Tag.from_name(name) for name in _as_names(data.get("tags"))],
        reading_time=ReadingTime.from_text(entry.body),
        featured_image=str(featured_image) if featured_image else None,
        source_path=entry.path,
    )


def is_published(post: Post, *, include_future: bool = True, today: date | None = None) -> bool:
    """Return whether a post should appear on the site."""
    if include_future:
        return True
    return post.published_date <= (today or date.today())


def sort_posts(posts: Iterable[Post]) -> list[Post]:
    """Sort newest first; posts sharing a date keep their relative order."""
    return sorted(posts, key=lambda post: post.published_date, reverse=True)


def map_to_sorted_posts(
    entries: Iterable[ContentEntry],
    *,
    include_future: bool = True,
    today: date | None = None,
) -> list[Post]:
    """Parse, filter and sort every entry.

    Any malformed entry aborts the whole call.
    """
    posts = [parse_entry(entry) for entry in entries]
    published = [post for post in posts if is_published(post, include_future=include_future, today=today)]
    hidden = len(posts) - len(published)
    if hidden:
        logger.info("Skipping %d post(s) dated in the future", hidden)
    return sort_posts(published)
