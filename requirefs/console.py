"""Shared Rich consoles for CLI output."""

from rich.console import Console

console = Console()
error_console = Console(stderr=True)

__all__ = ["console", "error_console"]
