"""CLI package for stardestroyer.

This package contains the Typer application and all commands.
"""

from stardestroyer.cli.main import app

__all__ = ["app"]
