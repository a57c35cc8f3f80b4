"""Core data types for postloom.

Every record is frozen: they are rebuilt from the source documents on each
run and never mutated afterwards.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from postloom.core.utils import kebab_case

WORDS_PER_MINUTE = 200

G = TypeVar("G")
R = TypeVar("R")
T = TypeVar("T")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Taxonomy ---
class Taxonomy(_Frozen):
    name: str
    path: str

    @classmethod
    def from_name(cls, name: str) -> Taxonomy:
        return cls(name=name, path=kebab_case(name))


class Tag(Taxonomy):
    pass


class Category(Taxonomy):
    pass


# --- Posts ---
class ReadingTime(_Frozen):
    minutes: float
    words: int
    text: str

    @classmethod
    def from_text(cls, body: str, words_per_minute: int = WORDS_PER_MINUTE) -> ReadingTime:
        """Estimate reading time from the whitespace separated words of ``body``."""
        words = len(body.split())
        minutes = words / words_per_minute
        return cls(minutes=minutes, words=words, text=f"{math.ceil(round(minutes, 2))} min read")


class ContentEntry(_Frozen):
    """One raw document as handed over by the loader."""

    path: str
    data: dict[str, Any] = Field(default_factory=dict)
    body: str = ""


class Post(_Frozen):
    slug: str
    title: str
    excerpt: str = ""
    published_date: date
    categories: list[Category] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    reading_time: ReadingTime
    featured_image: str | None = None
    source_path: str | None = Field(default=None, exclude=True)


class FeedItem(_Frozen):
    title: str
    description: str
    pub_date: date
    link: str

    @classmethod
    def from_post(cls, post: Post) -> FeedItem:
        return cls(title=post.title, description=post.excerpt, pub_date=post.published_date, link=post.slug)


# --- Collections ---
class Group(_Frozen, Generic[G, R]):
    group: G
    results: list[R]


class CollectionPage(_Frozen, Generic[T]):
    results: list[T]
    page: int
    total_pages: int
    page_size: int
    first: bool
    last: bool

    @model_validator(mode="after")
    def _check_boundaries(self) -> CollectionPage[T]:
        if not 1 <= self.page <= self.total_pages:
            msg = f"page {self.page} outside 1..{self.total_pages}"
            raise ValueError(msg)
        if self.first != (self.page == 1):
            msg = "first must be set exactly on page 1"
            raise ValueError(msg)
        if self.last != (self.page == self.total_pages):
            msg = "last must be set exactly on the final page"
            raise ValueError(msg)
        if len(self.results) > self.page_size:
            msg = f"{len(self.results)} results exceed page size {self.page_size}"
            raise ValueError(msg)
        return self


def empty_page() -> CollectionPage[Any]:
    """Return the single empty terminal page used when a listing has no items."""
    return CollectionPage(results=[], page=1, total_pages=1, page_size=1, first=True, last=True)


class ListingPage(_Frozen):
    """A collection page bound to the URL path it is published at."""

    route: str
    page: CollectionPage
