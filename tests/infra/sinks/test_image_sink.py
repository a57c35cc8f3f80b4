from pathlib import Path

from postloom.infra.sinks.cards import ImageSink, social_card_route


def test_social_card_route():
    assert social_card_route("my-post") == "/social/my-post.png"


def test_publish_cards_writes_one_file_per_slug(tmp_path: Path):
    sink = ImageSink(tmp_path)

    written = sink.publish_cards({"a": b"png-a", "b": b"png-b"})

    assert written == [tmp_path / "social" / "a.png", tmp_path / "social" / "b.png"]
    assert (tmp_path / "social" / "b.png").read_bytes() == b"png-b"


def test_write_creates_parents(tmp_path: Path):
    path = ImageSink(tmp_path / "dist").write("/favicon-16.png", b"x")
    assert path == tmp_path / "dist" / "favicon-16.png"
    assert path.read_bytes() == b"x"
