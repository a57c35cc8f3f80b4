import threading
from pathlib import Path

import pytest

from postloom.cards.fonts import FontRegistry, default_registry
from postloom.core.exceptions import ConfigError, MissingAssetError


def test_bundled_font_needs_no_registration(registry: FontRegistry):
    registry.ensure_registered([None])

    assert registry.is_registered(None)
    font = registry.font(None, 40)
    assert font.size == 40


def test_registration_is_idempotent(registry: FontRegistry, tmp_path: Path):
    font_file = tmp_path / "Title.ttf"
    font_file.write_bytes(b"")

    registry.ensure_registered([font_file])
    registry.ensure_registered([tmp_path / "." / "Title.ttf"])

    assert registry.is_registered(font_file)


def test_concurrent_registration(registry: FontRegistry, tmp_path: Path):
    font_file = tmp_path / "Body.ttf"
    font_file.write_bytes(b"")
    errors: list[Exception] = []

    def register():
        try:
            registry.ensure_registered([font_file, None])
        except Exception as e:  # pragma: no cover - failure path
            errors.append(e)

    threads = [threading.Thread(target=register) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert registry.is_registered(font_file)


def test_missing_font_file_is_fatal(registry: FontRegistry, tmp_path: Path):
    missing = tmp_path / "Missing.ttf"

    with pytest.raises(MissingAssetError, match="font"):
        registry.ensure_registered([missing])
    assert not registry.is_registered(missing)


def test_unreadable_font_file_is_fatal(registry: FontRegistry, tmp_path: Path):
    broken = tmp_path / "Broken.ttf"
    broken.write_bytes(b"not a font")
    registry.ensure_registered([broken])

    with pytest.raises(MissingAssetError):
        registry.font(broken, 20)


def test_sites_with_different_fonts_share_one_registry(registry: FontRegistry, tmp_path: Path):
    first = tmp_path / "site-a" / "Title.ttf"
    second = tmp_path / "site-b" / "Title.ttf"
    for font_file in (first, second):
        font_file.parent.mkdir()
        font_file.write_bytes(b"")

    registry.ensure_registered([first])
    registry.ensure_registered([second])

    assert registry.is_registered(first)
    assert registry.is_registered(second)


def test_unregistered_font(registry: FontRegistry, tmp_path: Path):
    with pytest.raises(ConfigError, match="not registered"):
        registry.font(tmp_path / "Nope.ttf", 12)


def test_default_registry_is_shared():
    assert default_registry() is default_registry()
