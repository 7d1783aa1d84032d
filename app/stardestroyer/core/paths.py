"""Path management for stardestroyer.

This module locates the project root, the block configuration file and
the user configuration directory.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "stardestroyer"

# Config file names, in lookup order
CONFIG_FILENAMES: tuple[str, ...] = ("destroy.config.json", "destroy.config.toml")

# Prefix given to the files and folders of a destroyed block
REMOVED_PREFIX = "REMOVED_"


def get_project_root(project_dir: Path | None = None) -> Path:
    """Get the project root directory.

    Args:
        project_dir: Explicit project directory. If None, uses the current directory.

    Returns:
        Absolute path to the project root.
    """
    return (project_dir or Path.cwd()).resolve()


def find_config_path(project_root: Path) -> Path | None:
    """Find the block configuration file of a project.

    Args:
        project_root: Project root directory.

    Returns:
        Path of the first existing config file, or None if there is none.
    """
    for filename in CONFIG_FILENAMES:
        candidate = project_root / filename
        if candidate.is_file():
            return candidate
    return None


def get_config_path(project_root: Path) -> Path:
    """Get the path of the block configuration file.

    Falls back to the default JSON file name when no config file exists,
    so error messages can name the expected location.

    Args:
        project_root: Project root directory.

    Returns:
        Path to the config file.
    """
    return find_config_path(project_root) or project_root / CONFIG_FILENAMES[0]


def get_user_config_dir() -> Path:
    """Get the user configuration directory.

    Returns:
        Path to ~/.config/stardestroyer/ (or XDG_CONFIG_HOME/stardestroyer/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def quarantined_path(path: Path) -> Path:
    """Get the name a path takes once its block is destroyed.

    Args:
        path: Original file or folder path.

    Returns:
        Sibling path with the ``REMOVED_`` prefix on its base name.
    """
    return path.with_name(f"{REMOVED_PREFIX}{path.name}")
