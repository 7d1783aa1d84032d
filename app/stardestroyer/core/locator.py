"""Locating and rewriting block instances across a project.

A block pass rewrites every matching project file concurrently, waits for
all of them, and only then renames or deletes the files and folders the
block owns. Path operations run one at a time in reverse declaration
order so that nested paths are handled before their parents.
"""

import asyncio
import fnmatch
import logging
import os
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from stardestroyer.core.paths import quarantined_path
from stardestroyer.core.rewriter import rewrite_file
from stardestroyer.markers.replacers import Replacer
from stardestroyer.models.config import BlockConfig

logger = logging.getLogger(__name__)

# Script, JSX, stylesheet, Sass and Less sources
SOURCE_EXTENSIONS: frozenset[str] = frozenset({".js", ".jsx", ".css", ".scss", ".sass", ".less"})


class PathOutcome(str, Enum):
    """What happened to a path owned by a block.

    Attributes:
        RENAMED: Path was given the ``REMOVED_`` prefix.
        DELETED: Quarantined path was deleted.
        SKIPPED: Path was absent, nothing to do.
        PLANNED: Dry-run, the path would be renamed or deleted.
    """

    RENAMED = "renamed"
    DELETED = "deleted"
    SKIPPED = "skipped"
    PLANNED = "planned"


@dataclass(frozen=True, slots=True)
class PathActionResult:
    """Result of a single path operation.

    Attributes:
        path: Path the operation targeted.
        outcome: What happened.
        target: New path after a rename, None otherwise.
    """

    path: Path
    outcome: PathOutcome
    target: Path | None = None


PathAction = Callable[[Path, bool], PathActionResult]


@dataclass(slots=True)
class BlockPassResult:
    """Outcome of one block pass over the project.

    Attributes:
        block: Name of the processed block.
        changed_files: Files whose content changed, sorted.
        path_results: Results of the path operations, in execution order.
    """

    block: str
    changed_files: list[Path] = field(default_factory=list)
    path_results: list[PathActionResult] = field(default_factory=list)


def _is_ignored(relative: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(relative, pattern) for pattern in patterns)


def list_project_files(project_root: Path, ignore: Iterable[str]) -> list[Path]:
    """List the source files of a project.

    Directories matching an ignore pattern are not descended into, so a
    pattern such as ``node_modules/**`` prunes the whole tree.

    Args:
        project_root: Project root directory.
        ignore: Glob patterns matched against POSIX paths relative to the root.

    Returns:
        Sorted source file paths.
    """
    patterns = list(ignore)
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(project_root):
        current = Path(dirpath)
        relative_dir = current.relative_to(project_root).as_posix()
        prefix = "" if relative_dir == "." else f"{relative_dir}/"

        dirnames[:] = sorted(
            name
            for name in dirnames
            if not _is_ignored(f"{prefix}{name}", patterns)
            and not _is_ignored(f"{prefix}{name}/", patterns)
        )
        for name in filenames:
            if Path(name).suffix.lower() not in SOURCE_EXTENSIONS:
                continue
            if _is_ignored(f"{prefix}{name}", patterns):
                continue
            files.append(current / name)
    return sorted(files)


def quarantine_path(path: Path, dry_run: bool = False) -> PathActionResult:
    """Rename a block path by prefixing its base name with ``REMOVED_``.

    Absent paths are skipped, which makes repeated runs a no-op.

    Args:
        path: Absolute path to rename.
        dry_run: If True, only report the rename.

    Returns:
        PathActionResult describing the outcome.

    Raises:
        OSError: If the rename fails.
    """
    if not (path.exists() or path.is_symlink()):
        logger.debug("Skipping absent path %s", path)
        return PathActionResult(path=path, outcome=PathOutcome.SKIPPED)

    target = quarantined_path(path)
    if dry_run:
        return PathActionResult(path=path, outcome=PathOutcome.PLANNED, target=target)

    path.rename(target)
    logger.info("Renamed %s to %s", path, target.name)
    return PathActionResult(path=path, outcome=PathOutcome.RENAMED, target=target)


def delete_quarantined_path(path: Path, dry_run: bool = False) -> PathActionResult:
    """Delete the quarantined form of a block path.

    Args:
        path: Original absolute path; its ``REMOVED_`` sibling is deleted.
        dry_run: If True, only report the deletion.

    Returns:
        PathActionResult describing the outcome.

    Raises:
        OSError: If the deletion fails.
    """
    target = quarantined_path(path)
    if not (target.exists() or target.is_symlink()):
        logger.debug("Skipping absent path %s", target)
        return PathActionResult(path=target, outcome=PathOutcome.SKIPPED)

    if dry_run:
        return PathActionResult(path=target, outcome=PathOutcome.PLANNED)

    # Directories (but not symlinks to directories)
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    else:
        target.unlink()
    logger.info("Deleted %s", target)
    return PathActionResult(path=target, outcome=PathOutcome.DELETED)


async def process_block(
    project_root: Path,
    block_name: str,
    block: BlockConfig,
    replacer: Replacer,
    *,
    ignore: Iterable[str],
    path_action: PathAction | None = None,
    dry_run: bool = False,
) -> BlockPassResult:
    """Rewrite every occurrence of a block and apply its path operation.

    Args:
        project_root: Project root directory.
        block_name: Block to process.
        block: Declaration of the block.
        replacer: Transformation applied to each occurrence.
        ignore: Glob patterns of files to leave alone.
        path_action: Operation applied to each declared path, if any.
        dry_run: If True, report changes without touching the project.

    Returns:
        BlockPassResult with the changed files and path results.

    Raises:
        OSError: If a file cannot be read, written, renamed or deleted.
    """
    result = BlockPassResult(block=block_name)

    files = await asyncio.to_thread(list_project_files, project_root, ignore)
    logger.debug("Scanning %d file(s) for block %s", len(files), block_name)

    # Every rewrite settles before the first failure is raised
    outcomes = await asyncio.gather(
        *(rewrite_file(path, block_name, replacer, dry_run=dry_run) for path in files),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            raise outcome
    result.changed_files = [
        path for path, was_changed in zip(files, outcomes, strict=True) if was_changed
    ]

    if path_action is not None:
        for relative in reversed(block.paths):
            result.path_results.append(path_action(project_root / relative, dry_run))

    return result
