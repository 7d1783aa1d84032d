"""Block configuration file I/O operations.

This module provides functions for loading, saving and deleting the
block configuration of a project. The configuration is stored as
destroy.config.json; destroy.config.toml is accepted as an alternative
and written back as TOML.
"""

import json
import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from stardestroyer.core.paths import find_config_path, get_config_path
from stardestroyer.models.config import ProjectConfig

logger = logging.getLogger(__name__)

# Indentation used when writing destroy.config.json
JSON_INDENT = 4


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the configuration content is invalid."""


def _is_toml(path: Path) -> bool:
    return path.suffix == ".toml"


def _parse(path: Path, raw: bytes) -> Any:
    if _is_toml(path):
        try:
            return tomllib.loads(raw.decode("utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid TOML syntax in {path.name}: {e}") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON syntax in {path.name}: {e}") from e


def _serialize(path: Path, data: dict[str, Any]) -> bytes:
    if _is_toml(path):
        return tomli_w.dumps(data).encode("utf-8")
    return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False).encode("utf-8")


def load_config(project_root: Path) -> tuple[ProjectConfig, Path]:
    """Load and validate the block configuration of a project.

    Args:
        project_root: Project root directory.

    Returns:
        Tuple of the validated ProjectConfig and the path it was read from.

    Raises:
        ConfigNotFoundError: If no configuration file exists.
        ConfigParseError: If the file is not valid JSON/TOML.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = find_config_path(project_root)
    if config_path is None:
        raise ConfigNotFoundError(f"Config not found: {get_config_path(project_root)}")

    try:
        raw = config_path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    data = _parse(config_path, raw)

    try:
        config = ProjectConfig.from_data(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e

    unknown_in_use = [name for name in config.blocks_in_use or [] if not config.has_block(name)]
    if unknown_in_use:
        logger.debug("blocksInUse names undeclared blocks: %s", ", ".join(unknown_in_use))

    for name, block in config.blocks.items():
        unknown = [dep for dep in block.block_dependencies if not config.has_block(dep)]
        if unknown:
            logger.debug("Block %s depends on undeclared blocks: %s", name, ", ".join(unknown))

    logger.debug("Loaded %d block(s) from %s", len(config.blocks), config_path)
    return config, config_path


def save_config(config: ProjectConfig, path: Path) -> Path:
    """Save the block configuration.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    The temporary file is cleaned up on failure.

    Args:
        config: The ProjectConfig to save.
        path: Path to save to. The suffix selects JSON or TOML.

    Returns:
        Path where the configuration was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    payload = _serialize(path, config.to_data())

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(payload)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    logger.debug("Saved config to %s", path)
    return path


def delete_config(path: Path) -> bool:
    """Delete the configuration file.

    Args:
        path: Path of the configuration file.

    Returns:
        True if a file was deleted, False if it did not exist.

    Raises:
        ConfigError: If the file exists but cannot be deleted.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ConfigError(f"Failed to delete config: {e}") from e
    logger.debug("Deleted config %s", path)
    return True


def require_config(project_root: Path) -> tuple[ProjectConfig, Path]:
    """Load the configuration or exit with a helpful error message.

    This is a convenience wrapper around load_config() for CLI commands.

    Args:
        project_root: Project root directory.

    Returns:
        Tuple of the loaded ProjectConfig and its path.

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    import typer

    from stardestroyer.utils.formatting import print_error

    try:
        return load_config(project_root)
    except ConfigNotFoundError as e:
        print_error(f"{e}. Run the command from the project root or pass --project-dir.")
        raise typer.Exit(code=1) from e
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e
