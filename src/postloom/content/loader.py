"""Load Markdown documents from the content directory."""

from __future__ import annotations

import logging
from pathlib import Path

import frontmatter
import yaml

from postloom.core.exceptions import MalformedEntryError
from postloom.core.types import ContentEntry

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = frozenset({".md", ".mdx", ".markdown"})


def entry_path(file_path: Path, content_dir: Path) -> str:
    """Return the storage path of a document relative to the content root.

    ``2024/2024-03-05-a/index.md`` is kept as is; a flat file such as
    ``2024/2024-03-05-a.md`` loses its extension.
    """
    relative = file_path.relative_to(content_dir)
    if relative.stem != "index":
        relative = relative.with_suffix("")
    return relative.as_posix()


def load_entry(file_path: Path, content_dir: Path) -> ContentEntry:
    """Read one document and split its frontmatter from the body.

    Raises:
        MalformedEntryError: If the frontmatter is not valid YAML.

    """
    path = entry_path(file_path, content_dir)
    try:
        post = frontmatter.load(str(file_path), encoding="utf-8")
    except (yaml.YAMLError, ValueError) as exc:
        raise MalformedEntryError(path, f"invalid frontmatter: {exc}") from exc

    return ContentEntry(path=path, data=dict(post.metadata), body=post.content)


def load_entries(content_dir: Path) -> list[ContentEntry]:
    """Load every document below ``content_dir``, sorted by storage path."""
    if not content_dir.is_dir():
        logger.warning("Content directory not found: %s", content_dir)
        return []

    files = sorted(
        path for path in content_dir.rglob("*") if path.is_file() and path.suffix.lower() in CONTENT_SUFFIXES
    )
    entries = [load_entry(path, content_dir) for path in files]
    logger.debug("Loaded %d document(s) from %s", len(entries), content_dir)
    return entries
