"""CLI commands for the trade journal."""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
