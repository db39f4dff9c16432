"""CLI commands for backpick.

This package contains all subcommand implementations.
"""

from backpick.cli.commands import backup, config, scan

__all__ = ["backup", "config", "scan"]
