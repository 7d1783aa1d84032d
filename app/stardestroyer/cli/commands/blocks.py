"""Blocks command implementation.

Lists the blocks declared in the configuration and, optionally, how
often each one is marked in the project's source files.
"""

from pathlib import Path
from typing import Annotated

import typer

from stardestroyer.cli.display import create_blocks_table
from stardestroyer.cli.types import project_root_from_context
from stardestroyer.core.config import require_config
from stardestroyer.core.locator import list_project_files
from stardestroyer.core.rewriter import read_source
from stardestroyer.markers.grammar import find_occurrences
from stardestroyer.models.config import ProjectConfig
from stardestroyer.utils.formatting import console, print_error, print_info


def _count_occurrences(config: ProjectConfig, project_root: Path) -> dict[str, int]:
    """Count marker occurrences of every block across the project."""
    counts = dict.fromkeys(config.blocks, 0)
    for path in list_project_files(project_root, config.ignore_patterns):
        content = read_source(path)
        for name in counts:
            counts[name] += len(find_occurrences(content, name, path.name))
    return counts


def list_blocks(
    ctx: typer.Context,
    scan: Annotated[
        bool,
        typer.Option(
            "--scan",
            "-s",
            help="Count marker occurrences of each block in the project files.",
        ),
    ] = False,
) -> None:
    """List the blocks declared in the configuration."""
    project_root = project_root_from_context(ctx)
    config, config_path = require_config(project_root)

    if not config.blocks:
        print_info(f"No blocks declared in {config_path.name}.")
        return

    counts: dict[str, int] | None = None
    if scan:
        try:
            counts = _count_occurrences(config, project_root)
        except (OSError, UnicodeDecodeError) as e:
            print_error(f"Failed to scan project files: {e}")
            raise typer.Exit(code=1) from e

    console.print(create_blocks_table(config, title=f"Blocks ({config_path.name})", markers=counts))

    removed = len(config.removed_blocks)
    console.print(f"\n[dim]{len(config.blocks)} block(s), {removed} removed[/dim]")
