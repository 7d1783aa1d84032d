"""Data models for stardestroyer.

This module exports the configuration models.
"""

from stardestroyer.models.config import DEFAULT_IGNORE, BlockConfig, ProjectConfig

__all__ = ["DEFAULT_IGNORE", "BlockConfig", "ProjectConfig"]
