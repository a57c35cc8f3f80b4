"""JSON Output Sink for the listing index."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from postloom.listing.index import SiteIndex


class JsonIndexSink:
    """Writes the site index as JSON documents for the page generator.

    Creates one file per listing under ``data/``:
    posts.json, pages.json, tags.json, categories.json and feed.json.
    """

    def __init__(self, output_dir: Path) -> None:
        """Initialize the JSON index sink.

        Args:
            output_dir: Build output directory; files go to its data/ folder

        """
        self.data_dir = Path(output_dir) / "data"

    def publish(self, index: SiteIndex) -> list[Path]:
        """Write every listing and return the written paths.

        Overwrites existing files.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        documents = {
            "posts.json": index.posts,
            "pages.json": [index.home, *index.post_pages],
            "tags.json": index.tags,
            "categories.json": index.categories,
            "feed.json": index.feed,
        }
        return [self._write(name, payload) for name, payload in documents.items()]

    def _write(self, name: str, payload: list[BaseModel]) -> Path:
        path = self.data_dir / name
        data: list[Any] = [item.model_dump(mode="json") for item in payload]
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        return path
