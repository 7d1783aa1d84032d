"""CLI commands for stardestroyer.

This package contains all command implementations.
"""

from stardestroyer.cli.commands import blocks, clean, destroy

__all__ = ["blocks", "clean", "destroy"]
