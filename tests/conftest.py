"""Shared fixtures for the postloom test suite."""

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest
from PIL import Image

# Add src to path so the suite runs without an editable install
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from postloom.cards.fonts import FontRegistry  # noqa: E402
from postloom.core.config import CardSettings  # noqa: E402
from postloom.core.types import ContentEntry  # noqa: E402


def make_entry(
    day: date,
    slug: str,
    *,
    title: str | None = None,
    tags: list[str] | None = None,
    categories: list[str] | None = None,
    body: str = "word " * 400,
    **data,
) -> ContentEntry:
    """Build a content entry stored at ``<year>/<yyyy>-<mm>-<dd>-<slug>``."""
    payload = {"title": title or slug.replace("-", " ").title(), **data}
    if tags is not None:
        payload["tags"] = tags
    if categories is not None:
        payload["categories"] = categories
    return ContentEntry(path=f"{day.year}/{day.isoformat()}-{slug}", data=payload, body=body)


def make_entries(count: int, start: date = date(2023, 1, 1)) -> list[ContentEntry]:
    """``count`` entries on consecutive days, oldest first."""
    return [make_entry(start + timedelta(days=i), f"post-{i}") for i in range(count)]


def write_png(path: Path, size: int = 64, color: str = "#3e84cb") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (size, size), color).save(path, format="PNG")
    return path


@pytest.fixture
def asset_dir(tmp_path: Path) -> Path:
    """Directory holding generated icon and logo PNGs."""
    assets = tmp_path / "assets"
    for name in ("calendar-outline.png", "stopwatch.png", "tag.png", "logo-square.png"):
        write_png(assets / name)
    return assets


@pytest.fixture
def card_settings(asset_dir: Path) -> CardSettings:
    """Card settings using generated icons and Pillow's bundled font."""
    return CardSettings(
        title_font=None,
        body_font=None,
        calendar_icon=asset_dir / "calendar-outline.png",
        stopwatch_icon=asset_dir / "stopwatch.png",
        tag_icon=asset_dir / "tag.png",
        logo=asset_dir / "logo-square.png",
    )


@pytest.fixture
def registry() -> FontRegistry:
    return FontRegistry()


@pytest.fixture
def site_root(tmp_path: Path, asset_dir: Path) -> Path:
    """A small site with three posts and a config file using bundled fonts."""
    posts = tmp_path / "content" / "posts"
    documents = {
        "2024/2024-03-05-my-post/index.md": "---\ntitle: My Post\ntags: [Java, Spring Boot]\ncategories: [Tutorials]\n---\nHello world.\n",
        "2024/2024-04-01-second.md": "---\ntitle: Second\ntags: [Java]\n---\nMore words here.\n",
        "2023/2023-12-24-xmas.md": "---\ntitle: Xmas\nexcerpt: Holiday post\n---\nHo ho ho.\n",
    }
    for relative, text in documents.items():
        path = posts / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    (tmp_path / ".postloom.toml").write_text(
        '[site]\ntitle = "Test blog"\npage_size = 2\n\n'
        '[card]\ntitle_font = ""\nbody_font = ""\n\n'
        '[manifest]\nicon = "assets/logo-square.png"\nicon_sizes = [16, 32]\n',
        encoding="utf-8",
    )
    return tmp_path
