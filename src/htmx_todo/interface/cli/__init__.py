"""Command-line interface."""

from htmx_todo.interface.cli.main import main

__all__ = ["main"]
