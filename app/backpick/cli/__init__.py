"""CLI package for backpick.

This package contains the Typer application and all subcommands.
"""

from backpick.cli.main import app

__all__ = ["app"]
