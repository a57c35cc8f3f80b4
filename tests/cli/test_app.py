from pathlib import Path

from PIL import Image
from typer.testing import CliRunner

from postloom.cli.app import app

runner = CliRunner()


def test_build_command(site_root: Path):
    result = runner.invoke(app, ["build", "--site-root", str(site_root)])

    assert result.exit_code == 0, result.output
    assert "Built 3 post(s)" in result.output
    assert (site_root / "dist" / "social" / "my-post.png").is_file()


def test_index_command(site_root: Path):
    result = runner.invoke(app, ["index", "--site-root", str(site_root)])

    assert result.exit_code == 0, result.output
    assert "3 post(s), 3 feed item(s)" in result.output
    assert not (site_root / "dist").exists()


def test_card_command(site_root: Path, tmp_path: Path):
    out = tmp_path / "cards" / "xmas.png"

    result = runner.invoke(app, ["card", "xmas", "--out", str(out), "--site-root", str(site_root)])

    assert result.exit_code == 0, result.output
    assert Image.open(out).size == (1200, 600)


def test_card_command_unknown_slug(site_root: Path, tmp_path: Path):
    result = runner.invoke(app, ["card", "nope", "--out", str(tmp_path / "x.png"), "--site-root", str(site_root)])

    assert result.exit_code == 1
    assert "No post with slug" in result.output


def test_build_reports_content_errors(site_root: Path):
    bad = site_root / "content" / "posts" / "2024" / "not-dated.md"
    bad.write_text("---\ntitle: Oops\n---\n", encoding="utf-8")

    result = runner.invoke(app, ["build", "--site-root", str(site_root)])

    assert result.exit_code == 1
    assert "Content Error" in result.output
    assert "2024/not-dated" in result.output
    assert "[/index.<ext>]" in result.output


def test_build_debug_reraises(site_root: Path):
    bad = site_root / "content" / "posts" / "2024" / "not-dated.md"
    bad.write_text("---\ntitle: Oops\n---\n", encoding="utf-8")

    result = runner.invoke(app, ["build", "--site-root", str(site_root), "--debug"])

    assert result.exit_code != 0
    assert result.exception is not None
