"""Social card rendering with Pillow.

Layout on the default 1200x600 canvas::

    +--------------------------------------------------+
    |  +-------------------------------------------+   |
    |  | Wrapped title                             |   |
    |  |                                           |   |
    |  | [cal]   March 5th, 2024                   |   |
    |  | [watch] 4 minute read                     |   |
    |  | [tag]   Java, Spring                [logo]|   |
    |  +-------------------------------------------+#  |
    |   ############################################   |
    +--------------------------------------------------+
"""

from __future__ import annotations

import io
import logging
import math
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from PIL import Image, ImageDraw

from postloom.cards.fonts import FontRegistry, default_registry
from postloom.cards.layout import draw_line, draw_text
from postloom.core.config import CardSettings, PostloomConfig
from postloom.core.exceptions import MissingAssetError
from postloom.core.types import Post
from postloom.core.utils import format_long_date

logger = logging.getLogger(__name__)

PANEL_MARGIN = 60
SHADOW_DISTANCE = 20
BORDER_WIDTH = 4
CONTENT_INSET = 20
TITLE_TOP = 130
TITLE_LINE_HEIGHT = 60
ICON_SIZE = 48
ROW_TEXT_OFFSET = 70
ROW_BASELINE_OFFSET = 38
DATE_ROW_TOP = 280
READING_ROW_TOP = 350
TAGS_ROW_TOP = 420
LOGO_SIZE = 125


@dataclass(frozen=True)
class CardContent:
    """What a card shows. Rows with no value are left out."""

    title: str
    published_date: date | None = None
    reading_minutes: int = 0
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_post(cls, post: Post) -> CardContent:
        return cls(
            title=post.title,
            published_date=post.published_date,
            reading_minutes=math.floor(post.reading_time.minutes + 0.5),
            tags=[tag.name for tag in post.tags],
        )


def _load_image(path: Path, kind: str) -> Image.Image:
    try:
        with Image.open(path) as image:
            return image.convert("RGBA")
    except OSError as e:
        raise MissingAssetError(path, kind) from e


class CardRenderer:
    """Draws one PNG social card per post."""

    def __init__(
        self,
        settings: CardSettings,
        *,
        asset_root: Path | None = None,
        registry: FontRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.asset_root = asset_root or Path.cwd()
        self.registry = registry or default_registry()

    @classmethod
    def from_config(cls, config: PostloomConfig, registry: FontRegistry | None = None) -> CardRenderer:
        return cls(config.card, asset_root=config.paths.site_root, registry=registry)

    def _asset(self, path: Path) -> Path:
        return path if path.is_absolute() else self.asset_root / path

    def _font_path(self, path: Path | None) -> Path | None:
        return None if path is None else self._asset(path)

    def render(self, post: Post) -> bytes:
        """Render the card for ``post`` as PNG bytes.

        Raises:
            MissingAssetError: If a font, icon or logo cannot be loaded.

        """
        return self.render_content(CardContent.from_post(post))

    def render_content(self, content: CardContent) -> bytes:
        s = self.settings
        title_path = self._font_path(s.title_font)
        body_path = self._font_path(s.body_font)
        self.registry.ensure_registered([title_path, body_path])

        image = Image.new("RGB", (s.width, s.height), s.background_color)
        draw = ImageDraw.Draw(image)
        self._draw_panel(draw)

        left = PANEL_MARGIN + CONTENT_INSET
        max_width = s.width - 2 * left
        title_font = self.registry.font(title_path, s.title_font_size)
        draw_text(draw, content.title, (left, TITLE_TOP), max_width, TITLE_LINE_HEIGHT, title_font, s.text_color)

        body_font = self.registry.font(body_path, s.body_font_size)
        rows: list[tuple[Path, int, str]] = []
        if content.published_date is not None:
            rows.append((s.calendar_icon, DATE_ROW_TOP, format_long_date(content.published_date)))
        rows.append((s.stopwatch_icon, READING_ROW_TOP, f"{content.reading_minutes} minute read"))
        if content.tags:
            rows.append((s.tag_icon, TAGS_ROW_TOP, ", ".join(content.tags)))

        for icon, top, text in rows:
            self._paste(image, icon, "icon", (left, top), ICON_SIZE)
            draw_line(draw, text, (left + ROW_TEXT_OFFSET, top + ROW_BASELINE_OFFSET), body_font, s.text_color)

        logo_x = s.width - PANEL_MARGIN - CONTENT_INSET - LOGO_SIZE - SHADOW_DISTANCE
        logo_y = s.height - PANEL_MARGIN - LOGO_SIZE
        self._paste(image, s.logo, "logo", (logo_x, logo_y), LOGO_SIZE)

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def _draw_panel(self, draw: ImageDraw.ImageDraw) -> None:
        """Draw the offset shadow rectangle, then the bordered panel over it."""
        s = self.settings
        x, y = PANEL_MARGIN, PANEL_MARGIN
        width, height = s.width - 2 * PANEL_MARGIN, s.height - 2 * PANEL_MARGIN
        draw.rectangle(
            (x + SHADOW_DISTANCE, y + SHADOW_DISTANCE, x + SHADOW_DISTANCE + width - 1, y + SHADOW_DISTANCE + height - 1),
            fill=s.border_color,
        )
        draw.rectangle(
            (x, y, x + width - 1, y + height - 1),
            fill=s.panel_color,
            outline=s.border_color,
            width=BORDER_WIDTH,
        )

    def _paste(self, image: Image.Image, path: Path, kind: str, xy: tuple[int, int], size: int) -> None:
        asset = _load_image(self._asset(path), kind).resize((size, size))
        image.paste(asset, xy, asset)


def render_cards(posts: Sequence[Post], renderer: CardRenderer, max_workers: int = 4) -> dict[str, bytes]:
    """Render every post's card on a thread pool.

    Results are keyed by slug in post order. The first failure cancels the
    remaining renders and is re-raised.
    """
    rendered: dict[str, bytes] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_post = {executor.submit(renderer.render, post): post for post in posts}
        try:
            for future in as_completed(future_to_post):
                rendered[future_to_post[future].slug] = future.result()
        except Exception:
            executor.shutdown(wait=False, cancel_futures=True)
            raise

    logger.info("Rendered %d social card(s)", len(rendered))
    return {post.slug: rendered[post.slug] for post in posts}
