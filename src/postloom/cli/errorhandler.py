"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from postloom.core.exceptions import (
    AssetError,
    ConfigError,
    ContentError,
    PaginationError,
)

console = Console()


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Context manager to turn build errors into a message and exit code 1.

    Args:
        debug: If True, re-raise so the full traceback is shown.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ContentError as e:
        if debug:
            raise
        console.print(f"[bold red]Content Error:[/bold red] {escape(str(e))}")
        console.print("Fix or move the offending document; no partial site was written.")
        raise typer.Exit(1) from e
    except AssetError as e:
        if debug:
            raise
        console.print(f"[bold red]Missing Asset:[/bold red] {escape(str(e))}")
        console.print("Check the [bold]card[/bold] section of your .postloom.toml.")
        raise typer.Exit(1) from e
    except (ConfigError, PaginationError) as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            console.print_exception(show_locals=False)
            raise typer.Exit(1) from e

        console.print(f"[bold red]An unexpected error occurred:[/bold red] {escape(str(e))}")
        console.print("[dim]Run with [bold]--debug[/bold] for more details.[/dim]")
        raise typer.Exit(1) from e
