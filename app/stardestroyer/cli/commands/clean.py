"""Clean command implementation.

Deletes removed blocks for good, strips the markers of the blocks that
stay and drops the block configuration.
"""

from typing import Annotated

import typer

from stardestroyer.cli.display import (
    create_blocks_table,
    print_pass_result,
    print_uninstall_results,
)
from stardestroyer.cli.types import project_root_from_context, run_file_operations
from stardestroyer.core.config import ConfigError, require_config
from stardestroyer.core.executor import clean_project, get_operator
from stardestroyer.utils.formatting import console, print_error, print_info, print_success


def clean(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt and proceed.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
) -> None:
    """Delete removed blocks and strip all block markers.

    Removed blocks are erased from every file and their REMOVED_ files and
    folders are deleted. Blocks that stay lose their markers but keep their
    code. Orphaned packages are uninstalled from package.json and the
    block configuration file is deleted.

    This cannot be undone. Commit your work first.
    """
    project_root = project_root_from_context(ctx)
    config, config_path = require_config(project_root)

    removed = list(config.removed_blocks)
    if not removed:
        print_info("Nothing to clean. No block is removed.")
        return

    console.print(create_blocks_table(config, removed, title="Blocks to Delete"))
    if not dry_run and not yes:
        confirmed = typer.confirm(
            f"\nDelete {len(removed)} block(s) and {config_path.name} permanently?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    operator = get_operator(project_root, dry_run=dry_run)
    try:
        report = run_file_operations(
            clean_project(config, config_path, project_root, operator, dry_run=dry_run)
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if report is None:
        print_info("Nothing to clean. No block is removed.")
        return

    for result in report.erased:
        console.print(f"\n[bold]{result.block}[/bold] [muted](deleted)[/]")
        print_pass_result(result, project_root, dry_run=dry_run)
    for result in report.unmarked:
        if result.changed_files:
            console.print(f"\n[bold]{result.block}[/bold] [muted](markers stripped)[/]")
            print_pass_result(result, project_root, dry_run=dry_run)
    print_uninstall_results(report.uninstall_results)

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
        return

    if report.config_deleted:
        print_info(f"Deleted {config_path.name}.")
    print_success(f"Cleaned {len(report.erased)} removed block(s).")
