"""Slice ordered sequences into fixed-size pages."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from postloom.core.exceptions import InvalidPageSizeError
from postloom.core.types import CollectionPage, ListingPage

T = TypeVar("T")


def paginate(items: Sequence[T], page_size: int) -> list[CollectionPage[T]]:
    """Split ``items`` into pages of at most ``page_size`` entries.

    Concatenating the pages' results in order gives back ``items``. An empty
    sequence yields no pages at all.

    Raises:
        InvalidPageSizeError: If ``page_size`` is smaller than one.

    """
    if page_size < 1:
        raise InvalidPageSizeError(page_size)

    total_pages = math.ceil(len(items) / page_size)
    return [
        CollectionPage(
            results=list(items[(page - 1) * page_size : page * page_size]),
            page=page,
            total_pages=total_pages,
            page_size=page_size,
            first=page == 1,
            last=page == total_pages,
        )
        for page in range(1, total_pages + 1)
    ]


def page_route(base: str, page: int) -> str:
    """Return the URL path of a page: ``base`` for page 1, ``base/page/n`` after."""
    base = base.rstrip("/") or "/"
    if page == 1:
        return base
    prefix = "" if base == "/" else base
    return f"{prefix}/page/{page}"


def paginate_routes(items: Sequence[T], page_size: int, base: str) -> list[ListingPage]:
    """Paginate ``items`` and bind each page to its route below ``base``."""
    return [ListingPage(route=page_route(base, page.page), page=page) for page in paginate(items, page_size)]
