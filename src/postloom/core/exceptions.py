"""Core exceptions for postloom.

Every failure in the pipeline is fatal for the build: nothing here is retried,
and callers are expected to let these bubble up to the CLI.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class PostloomError(Exception):
    """Base exception for all postloom errors."""


class ContentError(PostloomError):
    """Base exception for problems with authored documents."""


class MalformedPathError(ContentError):
    """Raised when a storage path does not yield a parseable date and slug."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        msg = f"Malformed post path '{path}': expected '<year>/<yyyy>-<mm>-<dd>-<slug>[/index.<ext>]'"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class MalformedEntryError(ContentError):
    """Raised when a document's frontmatter is missing required fields."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed post '{path}': {reason}")


class DuplicateSlugError(ContentError):
    """Raised when two posts resolve to the same slug and strict slugs are on."""

    def __init__(self, slug: str, paths: Sequence[str]) -> None:
        self.slug = slug
        self.paths = list(paths)
        super().__init__(f"Duplicate slug '{slug}' for posts: {', '.join(self.paths)}")


class DuplicateSlugWarning(UserWarning):
    """Emitted when a later post replaces an earlier one with the same slug."""


class PaginationError(PostloomError):
    """Base exception for pagination errors."""


class InvalidPageSizeError(PaginationError):
    """Raised when a page size is smaller than one."""

    def __init__(self, page_size: int) -> None:
        self.page_size = page_size
        super().__init__(f"Page size must be at least 1, got {page_size}")


class AssetError(PostloomError):
    """Base exception for asset loading errors."""


class MissingAssetError(AssetError):
    """Raised when a font, icon or logo required for rendering cannot be loaded."""

    def __init__(self, path: Path | str, kind: str) -> None:
        self.path = Path(path)
        self.kind = kind
        super().__init__(f"Missing {kind} asset: {self.path}")


class ConfigError(PostloomError):
    """Raised when the site configuration cannot be loaded."""
