"""Assemble the complete listing index for a site build."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable, Iterable, Sequence
from datetime import date
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from postloom.content.parser import map_to_sorted_posts
from postloom.core.config import SiteSettings
from postloom.core.exceptions import DuplicateSlugError, DuplicateSlugWarning
from postloom.core.types import (
    Category,
    CollectionPage,
    ContentEntry,
    FeedItem,
    Group,
    ListingPage,
    Post,
    Tag,
    empty_page,
)
from postloom.listing.grouping import group_by
from postloom.listing.pagination import paginate, paginate_routes

logger = logging.getLogger(__name__)

G = TypeVar("G")

POSTS_BASE = "/posts"
TAG_KIND = "tag"
CATEGORY_KIND = "category"


class SiteIndex(BaseModel):
    """Everything the page generator needs to emit listing pages."""

    model_config = ConfigDict(frozen=True)

    posts: list[Post]
    home: ListingPage
    post_pages: list[ListingPage] = Field(default_factory=list)
    tags: list[Group] = Field(default_factory=list)
    categories: list[Group] = Field(default_factory=list)
    feed: list[FeedItem] = Field(default_factory=list)

    def find_post(self, slug: str) -> Post | None:
        return next((post for post in self.posts if post.slug == slug), None)


def group_collection(
    posts: Sequence[Post],
    key_fn: Callable[[Post], Sequence[G]],
    page_size: int,
) -> list[Group[G, CollectionPage[Post]]]:
    """Group posts by ``key_fn`` and paginate each group independently."""
    return [Group(group=g.group, results=paginate(g.results, page_size)) for g in group_by(posts, key_fn)]


def taxonomy_pages(posts: Sequence[Post], kind: str, key_fn: Callable[[Post], Sequence[Tag | Category]], page_size: int) -> list[Group]:
    """Like ``group_collection`` but with pages bound to ``/{kind}/{path}`` routes."""
    return [
        Group(group=g.group, results=paginate_routes(g.results, page_size, f"/{kind}/{g.group.path}"))
        for g in group_by(posts, key_fn)
    ]


def resolve_duplicate_slugs(posts: Iterable[Post], *, strict: bool = True) -> list[Post]:
    """Ensure every slug is unique.

    With ``strict`` a duplicate raises ``DuplicateSlugError``. Otherwise a
    ``DuplicateSlugWarning`` is issued and the later post replaces the earlier
    one at the earlier post's position.

    Raises:
        DuplicateSlugError: If two posts share a slug and ``strict`` is set.

    """
    by_slug: dict[str, Post] = {}
    for post in posts:
        previous = by_slug.get(post.slug)
        if previous is not None:
            paths = [previous.source_path or previous.slug, post.source_path or post.slug]
            if strict:
                raise DuplicateSlugError(post.slug, paths)
            msg = f"Duplicate slug '{post.slug}': {paths[1]} replaces {paths[0]}"
            warnings.warn(msg, DuplicateSlugWarning, stacklevel=2)
        by_slug[post.slug] = post
    return list(by_slug.values())


def latest_feed_items(posts: Sequence[Post], limit: int) -> list[FeedItem]:
    """Return RSS items for the ``limit`` newest posts."""
    return [FeedItem.from_post(post) for post in posts[:limit]]


def build_site_index(
    entries: Iterable[ContentEntry],
    settings: SiteSettings,
    *,
    today: date | None = None,
) -> SiteIndex:
    """Parse every entry and compute all listings.

    Raises:
        MalformedPathError: If any entry path is malformed.
        MalformedEntryError: If any entry lacks required frontmatter.
        DuplicateSlugError: On duplicate slugs with ``strict_slugs`` enabled.

    """
    sorted_posts = map_to_sorted_posts(entries, include_future=settings.include_future, today=today)
    posts = resolve_duplicate_slugs(sorted_posts, strict=settings.strict_slugs)

    home_pages = paginate(posts[: settings.home_page_size], settings.home_page_size)
    home = ListingPage(route="/", page=home_pages[0] if home_pages else empty_page())

    index = SiteIndex(
        posts=posts,
        home=home,
        post_pages=paginate_routes(posts, settings.page_size, POSTS_BASE),
        tags=taxonomy_pages(posts, TAG_KIND, lambda post: post.tags, settings.page_size),
        categories=taxonomy_pages(posts, CATEGORY_KIND, lambda post: post.categories, settings.page_size),
        feed=latest_feed_items(posts, settings.feed_size),
    )
    logger.info(
        "Indexed %d post(s): %d page(s), %d tag group(s), %d category group(s)",
        len(index.posts),
        len(index.post_pages),
        len(index.tags),
        len(index.categories),
    )
    return index
