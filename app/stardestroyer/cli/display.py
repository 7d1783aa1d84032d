"""Shared Rich display functions for block passes and uninstall results.

Provides reusable table builders and summary printers used by the
destroy, clean and blocks commands.
"""

from pathlib import Path

from rich.markup import escape
from rich.table import Table

from stardestroyer.core.locator import BlockPassResult, PathOutcome
from stardestroyer.models.config import ProjectConfig
from stardestroyer.operators.base import UninstallResult
from stardestroyer.utils.formatting import console, create_table, print_info, print_warning


def _relative(path: Path, project_root: Path) -> str:
    try:
        return path.relative_to(project_root).as_posix()
    except ValueError:
        return str(path)


def block_state(config: ProjectConfig, name: str) -> str:
    """Describe the state of a block with Rich markup.

    Args:
        config: Project configuration.
        name: Block name.

    Returns:
        "removed", "unused" (not in blocksInUse) or "active".
    """
    if config.blocks[name].removed:
        return "[block_removed]removed[/]"
    if config.blocks_in_use is not None and name not in config.blocks_in_use:
        return "[block_unused]unused[/]"
    return "[block_active]active[/]"


def create_blocks_table(
    config: ProjectConfig,
    names: list[str] | None = None,
    title: str = "Blocks",
    markers: dict[str, int] | None = None,
) -> Table:
    """Create a table describing blocks.

    Args:
        config: Project configuration.
        names: Blocks to show, in order. If None, shows all blocks.
        title: Table title.
        markers: Marker occurrence counts per block. Adds a column when given.

    Returns:
        Rich Table with one row per block.
    """
    table = create_table(title)
    table.add_column("Block", no_wrap=True)
    table.add_column("State", width=8)
    table.add_column("Paths", justify="right")
    table.add_column("Requires", style="muted")
    table.add_column("Packages", style="muted")
    if markers is not None:
        table.add_column("Markers", justify="right", style="info")

    for name in names if names is not None else list(config.blocks):
        block = config.blocks[name]
        cells = [
            escape(name),
            block_state(config, name),
            str(len(block.paths)),
            escape(", ".join(block.block_dependencies) or "-"),
            escape(", ".join(block.packages) or "-"),
        ]
        if markers is not None:
            cells.append(str(markers.get(name, 0)))
        table.add_row(*cells)
    return table


def print_pass_result(result: BlockPassResult, project_root: Path, dry_run: bool = False) -> None:
    """Print the files and paths touched by a block pass.

    Args:
        result: Outcome of the block pass.
        project_root: Project root, used to shorten paths.
        dry_run: Whether nothing was actually changed.
    """
    verb = "Would rewrite" if dry_run else "Rewrote"
    for path in result.changed_files:
        console.print(f"  [muted]{verb}[/] {escape(_relative(path, project_root))}")

    for path_result in result.path_results:
        shown = escape(_relative(path_result.path, project_root))
        if path_result.outcome == PathOutcome.RENAMED and path_result.target is not None:
            console.print(f"  [warning]renamed[/] {shown} -> {escape(path_result.target.name)}")
        elif path_result.outcome == PathOutcome.DELETED:
            console.print(f"  [error]deleted[/] {shown}")
        elif path_result.outcome == PathOutcome.PLANNED:
            console.print(f"  [info]planned[/] {shown}")

    if not result.changed_files and not result.path_results:
        console.print("  [muted]No occurrences found.[/]")


def print_uninstall_results(results: list[UninstallResult]) -> None:
    """Print a summary of package uninstalls.

    Failed uninstalls are reported as warnings and do not change the
    exit status.

    Args:
        results: Results from the package operator.
    """
    if not results:
        return

    dry = [r.package for r in results if r.dry_run]
    done = [r.package for r in results if r.success and not r.dry_run]
    failed = [r for r in results if not r.success]

    if dry:
        print_info(f"Would uninstall: {', '.join(dry)}")
    if done:
        print_info(f"Uninstalled: {', '.join(done)}")
    for r in failed:
        print_warning(f"Could not uninstall {r.package}: {r.error or 'unknown error'}")
