"""Command line interface."""

from postloom.cli.app import app

__all__ = ["app"]
