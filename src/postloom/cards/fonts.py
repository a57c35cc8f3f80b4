"""Process-wide font registration for card rendering.

Font files are registered by resolved path once per process. Registration only
validates and records the file; every render opens its own font object so that
worker threads never share FreeType state. Two sites built in the same process
may use different fonts, since nothing is bound to a family name.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from PIL import ImageFont

from postloom.core.exceptions import ConfigError, MissingAssetError

logger = logging.getLogger(__name__)


class FontRegistry:
    """Set of font files known to be present.

    ``None`` stands for Pillow's bundled scalable font and is always available.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._paths: set[Path] = set()

    def ensure_registered(self, paths: Iterable[Path | None]) -> None:
        """Register every font file that is not registered yet.

        Safe to call from several threads at once; registering a file twice
        is a no-op.

        Raises:
            MissingAssetError: If a font file does not exist.

        """
        with self._lock:
            for path in paths:
                if path is None:
                    continue
                resolved = path.resolve()
                if resolved in self._paths:
                    continue
                if not resolved.is_file():
                    raise MissingAssetError(path, "font")
                self._paths.add(resolved)
                logger.debug("Registered font %s", resolved)

    def is_registered(self, path: Path | None) -> bool:
        if path is None:
            return True
        with self._lock:
            return path.resolve() in self._paths

    def font(self, path: Path | None, size: int) -> ImageFont.FreeTypeFont:
        """Open a new font object for a registered file.

        Raises:
            ConfigError: If the file was never registered.
            MissingAssetError: If the font file can no longer be read.

        """
        if path is None:
            return ImageFont.load_default(size=size)
        if not self.is_registered(path):
            msg = f"Font {path} is not registered"
            raise ConfigError(msg)
        try:
            return ImageFont.truetype(str(path), size)
        except OSError as e:
            raise MissingAssetError(path, "font") from e


_default_registry: FontRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> FontRegistry:
    """Return the shared registry, creating it on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = FontRegistry()
        return _default_registry
