"""Web app manifest and favicons."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from PIL import Image

from postloom.core.config import ManifestSettings, SiteSettings
from postloom.core.exceptions import MissingAssetError

logger = logging.getLogger(__name__)


def favicon_route(size: int) -> str:
    return f"/favicon-{size}.png"


def build_manifest(site: SiteSettings, manifest: ManifestSettings) -> dict[str, Any]:
    """Return the web app manifest document.

    Favicons are listed only when a source icon is configured.
    """
    sizes = manifest.icon_sizes if manifest.icon is not None else []
    return {
        "name": site.title,
        "description": site.description,
        "start_url": "/",
        "display": manifest.display,
        "background_color": manifest.background_color,
        "theme_color": manifest.theme_color,
        "icons": [
            {"src": favicon_route(size), "type": "image/png", "sizes": f"{size}x{size}"}
            for size in sizes
        ],
    }


def render_favicons(icon_path: Path, sizes: Iterable[int]) -> dict[int, bytes]:
    """Resize the square site icon to every size, as PNG bytes.

    Raises:
        MissingAssetError: If the icon cannot be opened.

    """
    try:
        with Image.open(icon_path) as opened:
            icon = opened.convert("RGBA")
    except OSError as e:
        raise MissingAssetError(icon_path, "icon") from e

    favicons: dict[int, bytes] = {}
    for size in sizes:
        buffer = io.BytesIO()
        icon.resize((size, size), Image.Resampling.LANCZOS).save(buffer, format="PNG")
        favicons[size] = buffer.getvalue()
    logger.debug("Rendered %d favicon(s) from %s", len(favicons), icon_path)
    return favicons
