"""Destroy and clean orchestration.

Sequences the block passes, dependency checks and package uninstalls
shared by the ``destroy`` and ``clean`` commands. The configuration is
passed in explicitly and mutated in place; saving or deleting it is left
to the caller except where noted.

Blocks are always processed one after another so that each block sees
the removal flags set for the blocks before it.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from stardestroyer.core.config import delete_config
from stardestroyer.core.dependencies import (
    check_removable,
    orphaned_dependencies,
    orphaned_dependencies_of_removed,
)
from stardestroyer.core.locator import (
    BlockPassResult,
    delete_quarantined_path,
    process_block,
    quarantine_path,
)
from stardestroyer.markers.replacers import ReplacerKind, get_replacer
from stardestroyer.models.config import ProjectConfig
from stardestroyer.operators.base import PackageOperator, UninstallResult
from stardestroyer.operators.npm import NpmOperator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DestroyReport:
    """Outcome of destroying one block.

    Attributes:
        block: Name of the block.
        skipped: True if the block was already removed and left alone.
        pass_result: Files rewritten and paths renamed, None when skipped.
        orphaned: Packages no remaining block needs.
        uninstall_results: Results of uninstalling the orphaned packages.
    """

    block: str
    skipped: bool = False
    pass_result: BlockPassResult | None = None
    orphaned: list[str] = field(default_factory=list)
    uninstall_results: list[UninstallResult] = field(default_factory=list)


@dataclass(slots=True)
class CleanReport:
    """Outcome of cleaning a project.

    Attributes:
        erased: Passes over removed blocks, in registry order.
        unmarked: Passes over kept blocks, in registry order.
        orphaned: Packages of removed blocks no kept block needs.
        uninstall_results: Results of uninstalling the orphaned packages.
        config_deleted: Whether the configuration file was deleted.
    """

    erased: list[BlockPassResult] = field(default_factory=list)
    unmarked: list[BlockPassResult] = field(default_factory=list)
    orphaned: list[str] = field(default_factory=list)
    uninstall_results: list[UninstallResult] = field(default_factory=list)
    config_deleted: bool = False


def get_operator(project_root: Path, dry_run: bool = False) -> PackageOperator:
    """Get the package operator for a project.

    Args:
        project_root: Directory the package manager runs in.
        dry_run: Whether to run in dry-run mode.

    Returns:
        Package operator instance.
    """
    return NpmOperator(project_root, dry_run=dry_run)


def uninstall_packages(
    operator: PackageOperator,
    packages: list[str],
    save: bool,
) -> list[UninstallResult]:
    """Uninstall packages, turning package manager errors into failed results.

    Uninstall failures never abort a command; removing a package that is
    already gone must be tolerated.

    Args:
        operator: Package operator to use.
        packages: Package names to uninstall.
        save: Whether to update the package manifest.

    Returns:
        List of UninstallResult, one per package.
    """
    if not packages:
        return []
    try:
        return operator.uninstall(packages, save=save)
    except (OSError, RuntimeError) as e:
        logger.warning("Failed to run %s: %s", operator.name, e)
        return [UninstallResult(package=p, success=False, error=str(e)) for p in packages]


async def destroy_block(
    config: ProjectConfig,
    project_root: Path,
    block_name: str,
    operator: PackageOperator,
    *,
    dry_run: bool = False,
) -> DestroyReport:
    """Destroy a single block.

    Comments out every occurrence, renames the block's paths with the
    ``REMOVED_`` prefix, uninstalls orphaned packages without touching the
    package manifest and flags the block as removed.

    Args:
        config: Project configuration, updated in place.
        project_root: Project root directory.
        block_name: Block to destroy. Must be declared in config.
        operator: Package operator for orphaned packages.
        dry_run: If True, report what would happen without touching the project.

    Returns:
        DestroyReport for the block.

    Raises:
        DependencyConflictError: If active blocks depend on the block.
        OSError: If a file operation fails.
    """
    block = config.blocks[block_name]
    if block.removed:
        logger.info("Block %s is already removed", block_name)
        return DestroyReport(block=block_name, skipped=True)

    check_removable(config, block_name)

    pass_result = await process_block(
        project_root,
        block_name,
        block,
        get_replacer(ReplacerKind.COMMENT),
        ignore=config.ignore_patterns,
        path_action=quarantine_path,
        dry_run=dry_run,
    )

    orphaned = orphaned_dependencies(config, block_name)
    block.removed = True
    uninstall_results = uninstall_packages(operator, orphaned, save=False)

    return DestroyReport(
        block=block_name,
        pass_result=pass_result,
        orphaned=orphaned,
        uninstall_results=uninstall_results,
    )


async def destroy_blocks(
    config: ProjectConfig,
    project_root: Path,
    block_names: list[str],
    operator: PackageOperator,
    *,
    dry_run: bool = False,
) -> list[DestroyReport]:
    """Destroy blocks one at a time, in the given order.

    A dependency conflict aborts the batch; blocks destroyed before it
    stay destroyed on disk.

    Args:
        config: Project configuration, updated in place.
        project_root: Project root directory.
        block_names: Blocks to destroy.
        operator: Package operator for orphaned packages.
        dry_run: If True, report what would happen without touching the project.

    Returns:
        DestroyReport per processed block.

    Raises:
        DependencyConflictError: If active blocks depend on one of the blocks.
        OSError: If a file operation fails.
    """
    reports: list[DestroyReport] = []
    for name in block_names:
        reports.append(await destroy_block(config, project_root, name, operator, dry_run=dry_run))
    return reports


async def clean_project(
    config: ProjectConfig,
    config_path: Path,
    project_root: Path,
    operator: PackageOperator,
    *,
    dry_run: bool = False,
) -> CleanReport | None:
    """Permanently clean a project of its removed blocks.

    Removed blocks are erased together with their markers and their
    quarantined paths are deleted. Kept blocks lose their markers but keep
    their code. Orphaned packages are uninstalled once, updating the
    package manifest, and the configuration file is deleted.

    Args:
        config: Project configuration.
        config_path: Path of the configuration file.
        project_root: Project root directory.
        operator: Package operator for orphaned packages.
        dry_run: If True, report what would happen without touching the project.

    Returns:
        CleanReport, or None if no block is removed and nothing was done.

    Raises:
        ConfigError: If the configuration file cannot be deleted.
        OSError: If a file operation fails.
    """
    if not config.removed_blocks:
        logger.info("No removed blocks, nothing to clean")
        return None

    report = CleanReport()
    ignore = config.ignore_patterns
    erase = get_replacer(ReplacerKind.ERASE)
    uncomment = get_replacer(ReplacerKind.UNCOMMENT)

    for name, block in config.blocks.items():
        if block.removed:
            report.erased.append(
                await process_block(
                    project_root,
                    name,
                    block,
                    erase,
                    ignore=ignore,
                    path_action=delete_quarantined_path,
                    dry_run=dry_run,
                )
            )
        else:
            report.unmarked.append(
                await process_block(
                    project_root, name, block, uncomment, ignore=ignore, dry_run=dry_run
                )
            )

    report.orphaned = orphaned_dependencies_of_removed(config)
    report.uninstall_results = uninstall_packages(operator, report.orphaned, save=True)

    if not dry_run:
        report.config_deleted = delete_config(config_path)
    return report
