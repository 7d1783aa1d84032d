"""Destroy command implementation.

Comments out the occurrences of a block, quarantines its files and
uninstalls the packages nothing else needs. Without a block name, every
block missing from blocksInUse is destroyed.
"""

from typing import Annotated

import typer

from stardestroyer.cli.display import (
    create_blocks_table,
    print_pass_result,
    print_uninstall_results,
)
from stardestroyer.cli.types import project_root_from_context, run_file_operations
from stardestroyer.core.config import ConfigError, require_config, save_config
from stardestroyer.core.dependencies import (
    DependencyConflictError,
    MissingBlocksInUseError,
    redundant_blocks,
)
from stardestroyer.core.executor import destroy_blocks, get_operator
from stardestroyer.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
)


def destroy(
    ctx: typer.Context,
    block: Annotated[
        str | None,
        typer.Argument(
            help="Block to destroy. If omitted, destroys all blocks not listed in blocksInUse.",
            show_default=False,
        ),
    ] = None,
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
    """Comment out a block and flag it as removed.

    Every occurrence of the block is commented out, the files and folders
    it owns get a REMOVED_ prefix and packages no other block needs are
    uninstalled without editing package.json. Run [bold]clean[/bold] later
    to delete the block for good.

    Examples:
        sd destroy analytics        # Destroy a single block
        sd destroy                  # Destroy every block not in blocksInUse
        sd destroy --dry-run        # Preview changes
    """
    project_root = project_root_from_context(ctx)
    config, config_path = require_config(project_root)

    if block is not None:
        if not config.has_block(block):
            print_error(f'{config_path.name} does not contain a block named "{block}"')
            raise typer.Exit(code=1)
        names = [block]
    else:
        try:
            names = redundant_blocks(config)
        except MissingBlocksInUseError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

        if not names:
            print_info("No redundant blocks to destroy.")
            return

        console.print(create_blocks_table(config, names, title="Redundant Blocks"))
        if not dry_run and not yes:
            confirmed = typer.confirm(
                f"\nDestroy {len(names)} block(s)?",
                default=False,
            )
            if not confirmed:
                print_info("Aborted.")
                raise typer.Exit(code=0)

    operator = get_operator(project_root, dry_run=dry_run)

    try:
        reports = run_file_operations(
            destroy_blocks(config, project_root, names, operator, dry_run=dry_run)
        )
    except DependencyConflictError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    destroyed = 0
    for report in reports:
        if report.skipped or report.pass_result is None:
            print_info(f'Block "{report.block}" is already removed.')
            continue
        destroyed += 1
        console.print(f"\n[bold]{report.block}[/bold]")
        print_pass_result(report.pass_result, project_root, dry_run=dry_run)
        print_uninstall_results(report.uninstall_results)

    if dry_run:
        print_info("\nDry-run mode: No changes were made.")
        return

    if not destroyed:
        return

    try:
        save_config(config, config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Destroyed {destroyed} block(s). Run 'sd clean' to delete them for good.")
