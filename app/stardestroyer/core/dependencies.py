"""Dependency bookkeeping between blocks.

Decides which blocks may be removed and which packages become unused
once a block is gone. All functions read the configuration passed to
them, so removal flags set earlier in the same command are taken into
account.
"""

import logging

from stardestroyer.core.config import ConfigError
from stardestroyer.models.config import ProjectConfig

logger = logging.getLogger(__name__)


class DependencyConflictError(Exception):
    """Raised when removing a block that active blocks still depend on.

    Attributes:
        block: Name of the block that was about to be removed.
        dependents: Active blocks declaring it in blockDependencies.
    """

    def __init__(self, block: str, dependents: list[str]) -> None:
        self.block = block
        self.dependents = dependents
        super().__init__(
            f'There are other blocks depending on "{block}": '
            f"{', '.join(dependents)}. Remove them first."
        )


class MissingBlocksInUseError(ConfigError):
    """Raised when redundant blocks are requested but blocksInUse is not set."""


def find_dependents(config: ProjectConfig, block_name: str) -> list[str]:
    """Find active blocks that depend on a block.

    Only direct dependents are considered.

    Args:
        config: Project configuration.
        block_name: Block about to be removed.

    Returns:
        Names of non-removed blocks listing block_name in blockDependencies,
        in registry order.
    """
    return [
        name
        for name, block in config.blocks.items()
        if name != block_name and not block.removed and block_name in block.block_dependencies
    ]


def check_removable(config: ProjectConfig, block_name: str) -> None:
    """Ensure no active block depends on a block.

    Args:
        config: Project configuration.
        block_name: Block about to be removed.

    Raises:
        DependencyConflictError: If active blocks depend on block_name.
    """
    dependents = find_dependents(config, block_name)
    if dependents:
        raise DependencyConflictError(block_name, dependents)


def _packages_in_use(config: ProjectConfig, excluded: set[str]) -> set[str]:
    used: set[str] = set()
    for name, block in config.blocks.items():
        if name in excluded or block.removed:
            continue
        used.update(block.packages)
    return used


def orphaned_dependencies(config: ProjectConfig, block_name: str) -> list[str]:
    """Compute the packages no other active block needs.

    A package from the block's dependencies or devDependencies is orphaned
    when no other non-removed block lists it in either of its own lists.

    Args:
        config: Project configuration.
        block_name: Block being removed.

    Returns:
        Orphaned package names in declaration order.
    """
    block = config.blocks[block_name]
    used = _packages_in_use(config, excluded={block_name})
    orphans = [package for package in block.packages if package not in used]
    if orphans:
        logger.debug("Block %s leaves orphaned packages: %s", block_name, ", ".join(orphans))
    return orphans


def orphaned_dependencies_of_removed(config: ProjectConfig) -> list[str]:
    """Compute the packages of all removed blocks that no active block needs.

    Each package appears once even if several removed blocks declare it.

    Args:
        config: Project configuration.

    Returns:
        Orphaned package names, ordered by block registry order.
    """
    used = _packages_in_use(config, excluded=set())
    orphans: dict[str, None] = {}
    for block in config.removed_blocks.values():
        for package in block.packages:
            if package not in used:
                orphans[package] = None
    return list(orphans)


def redundant_blocks(config: ProjectConfig) -> list[str]:
    """List blocks eligible for removal without naming them.

    Args:
        config: Project configuration.

    Returns:
        Non-removed blocks absent from blocksInUse, in registry order.

    Raises:
        MissingBlocksInUseError: If the configuration has no blocksInUse list.
    """
    if config.blocks_in_use is None:
        raise MissingBlocksInUseError(
            "The config does not contain a blocksInUse list, so redundant blocks "
            "cannot be determined. Name the block to destroy instead."
        )
    in_use = set(config.blocks_in_use)
    return [
        name for name, block in config.blocks.items() if not block.removed and name not in in_use
    ]
