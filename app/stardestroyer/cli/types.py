"""Shared helpers for CLI commands.

This module provides functions used across multiple CLI command modules
to avoid code duplication.
"""

import asyncio
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, TypeVar

import typer

from stardestroyer.core.paths import get_project_root
from stardestroyer.utils.formatting import print_error

T = TypeVar("T")


def project_root_from_context(ctx: typer.Context) -> Path:
    """Get the project root selected with the global --project-dir option.

    Args:
        ctx: Typer context of the running command.

    Returns:
        Absolute project root path.
    """
    project_dir: Path | None = None
    if isinstance(ctx.obj, dict):
        project_dir = ctx.obj.get("project_dir")
    return get_project_root(project_dir)


def run_file_operations(coroutine: Coroutine[Any, Any, T]) -> T:
    """Run an async block pass, exiting on file system errors.

    Args:
        coroutine: Coroutine performing file operations.

    Returns:
        The coroutine's result.

    Raises:
        typer.Exit: If a file cannot be read, decoded, written, renamed or deleted.
    """
    try:
        return asyncio.run(coroutine)
    except UnicodeDecodeError as e:
        print_error(f"Cannot decode file as UTF-8: {e}")
        raise typer.Exit(code=1) from e
    except OSError as e:
        print_error(f"File operation failed: {e}")
        raise typer.Exit(code=1) from e
