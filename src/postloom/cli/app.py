"""Main Typer application for postloom."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from postloom.cards.renderer import CardRenderer
from postloom.cli.errorhandler import console, handle_cli_errors
from postloom.core.config import PostloomConfig
from postloom.core.logging import configure_logging
from postloom.pipeline import build_site, load_index

app = typer.Typer(name="postloom", help="Build-time content pipeline for a static blog.", no_args_is_help=True)

SiteRootOption = Annotated[
    Path | None,
    typer.Option("--site-root", "-r", help="Site directory holding .postloom.toml (defaults to cwd)"),
]
DebugOption = Annotated[bool, typer.Option("--debug", help="Show full tracebacks on errors")]
LogLevelOption = Annotated[str | None, typer.Option("--log-level", help="Logging level (default: INFO)")]


@app.command()
def build(site_root: SiteRootOption = None, debug: DebugOption = False, log_level: LogLevelOption = None) -> None:
    """Build the post index, archives, social cards and manifest."""
    configure_logging(log_level)
    with handle_cli_errors(debug=debug):
        config = PostloomConfig.load(site_root)
        report = build_site(config)
    console.print(
        f"[bold green]Built {len(report.index.posts)} post(s)[/bold green] into {config.paths.abs_output_dir}"
    )


@app.command()
def index(site_root: SiteRootOption = None, debug: DebugOption = False, log_level: LogLevelOption = None) -> None:
    """Parse every post and summarise the listings without writing files."""
    configure_logging(log_level)
    with handle_cli_errors(debug=debug):
        config = PostloomConfig.load(site_root)
        site_index = load_index(config)

    table = Table(title=f"{config.site.title} index")
    table.add_column("Listing", style="bold cyan")
    table.add_column("Groups", justify="right")
    table.add_column("Pages", justify="right")
    table.add_row("posts", "-", str(len(site_index.post_pages)))
    table.add_row("tags", str(len(site_index.tags)), str(sum(len(g.results) for g in site_index.tags)))
    table.add_row(
        "categories",
        str(len(site_index.categories)),
        str(sum(len(g.results) for g in site_index.categories)),
    )
    console.print(table)
    console.print(f"{len(site_index.posts)} post(s), {len(site_index.feed)} feed item(s)")


@app.command()
def card(
    slug: Annotated[str, typer.Argument(help="Slug of the post to render")],
    out: Annotated[Path, typer.Option("--out", "-o", help="Where to write the PNG")],
    site_root: SiteRootOption = None,
    debug: DebugOption = False,
    log_level: LogLevelOption = None,
) -> None:
    """Render the social card of a single post."""
    configure_logging(log_level)
    with handle_cli_errors(debug=debug):
        config = PostloomConfig.load(site_root)
        post = load_index(config).find_post(slug)
        if post is None:
            console.print(f"[bold red]No post with slug[/bold red] '{slug}'")
            raise typer.Exit(1)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(CardRenderer.from_config(config).render(post))
    console.print(f"Wrote {out}")


if __name__ == "__main__":
    app()
