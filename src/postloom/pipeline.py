"""Full site build: load, index, render, write."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from postloom.cards.fonts import FontRegistry
from postloom.cards.renderer import CardRenderer, render_cards
from postloom.content.loader import load_entries
from postloom.core.config import PostloomConfig
from postloom.infra.sinks.cards import ImageSink
from postloom.infra.sinks.json import JsonIndexSink
from postloom.listing.index import SiteIndex, build_site_index
from postloom.site.manifest import build_manifest, favicon_route, render_favicons

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Summary of one build run."""

    index: SiteIndex
    data_files: list[Path] = field(default_factory=list)
    card_files: list[Path] = field(default_factory=list)
    site_files: list[Path] = field(default_factory=list)


def load_index(config: PostloomConfig, *, today: date | None = None) -> SiteIndex:
    """Load every document and compute the site index without writing anything."""
    entries = load_entries(config.paths.abs_content_dir)
    return build_site_index(entries, config.site, today=today)


def build_site(
    config: PostloomConfig,
    *,
    registry: FontRegistry | None = None,
    today: date | None = None,
) -> BuildReport:
    """Run the whole pipeline. Any error aborts the build.

    Raises:
        PostloomError: Subclasses for malformed content or missing assets.

    """
    output_dir = config.paths.abs_output_dir
    logger.info("Building site from %s into %s", config.paths.abs_content_dir, output_dir)

    index = load_index(config, today=today)

    # Nothing is written until every image has rendered.
    renderer = CardRenderer.from_config(config, registry=registry)
    cards = render_cards(index.posts, renderer, max_workers=config.build.max_workers)
    favicons: dict[int, bytes] = {}
    if config.manifest.icon is not None:
        favicons = render_favicons(config.resolve(config.manifest.icon), config.manifest.icon_sizes)

    report = BuildReport(index=index)
    report.data_files = JsonIndexSink(output_dir).publish(index)
    images = ImageSink(output_dir)
    report.card_files = images.publish_cards(cards)

    manifest_path = output_dir / "manifest.json"
    manifest_path.write_text(json.dumps(build_manifest(config.site, config.manifest), indent=2), encoding="utf-8")
    report.site_files.append(manifest_path)
    report.site_files.extend(images.write(favicon_route(size), data) for size, data in favicons.items())

    logger.info(
        "Build complete: %d data file(s), %d card(s), %d site file(s)",
        len(report.data_files),
        len(report.card_files),
        len(report.site_files),
    )
    return report
