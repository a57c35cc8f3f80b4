"""Image Output Sink for rendered PNG files."""

from collections.abc import Mapping
from pathlib import Path


def social_card_route(slug: str) -> str:
    """Public URL path of a post's social card."""
    return f"/social/{slug}.png"


class ImageSink:
    """Writes PNG buffers below the build output directory."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def write(self, route: str, data: bytes) -> Path:
        """Write ``data`` to the file backing ``route`` and return its path."""
        path = self.output_dir / route.lstrip("/")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def publish_cards(self, cards: Mapping[str, bytes]) -> list[Path]:
        """Write one ``social/{slug}.png`` per rendered card."""
        return [self.write(social_card_route(slug), data) for slug, data in cards.items()]
