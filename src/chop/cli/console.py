"""Shared console utilities for CLI commands.

stdout is reserved for the todo stream, so the console writes to stderr.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# Shared console instance for all CLI messages
console = Console(stderr=True, soft_wrap=True)


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{escape(msg)}[/red]")


def dim(msg: str) -> None:
    """Print a dimmed message."""
    console.print(f"[dim]{escape(msg)}[/dim]")
