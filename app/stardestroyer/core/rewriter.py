"""Rewriting of a single source file.

Files are read and written without newline translation so that line
terminators survive a rewrite unchanged.
"""

import asyncio
import logging
from pathlib import Path

from stardestroyer.markers.grammar import rewrite_content
from stardestroyer.markers.replacers import Replacer

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def read_source(path: Path) -> str:
    """Read a source file as text, keeping its line terminators."""
    with open(path, encoding=ENCODING, newline="") as f:
        return f.read()


def write_source(path: Path, content: str) -> None:
    """Write a source file as text, keeping its line terminators."""
    with open(path, "w", encoding=ENCODING, newline="") as f:
        f.write(content)


async def rewrite_file(
    path: Path,
    block_name: str,
    replacer: Replacer,
    *,
    dry_run: bool = False,
) -> bool:
    """Rewrite the occurrences of a block in one file.

    The file is only written when its content changes.

    Args:
        path: File to rewrite.
        block_name: Block to look for.
        replacer: Transformation applied to each occurrence.
        dry_run: If True, report the change without writing.

    Returns:
        True if the content changed (or would change in dry-run mode).

    Raises:
        OSError: If the file cannot be read or written.
    """
    content = await asyncio.to_thread(read_source, path)
    updated = rewrite_content(content, block_name, replacer, path.name)
    if updated == content:
        return False

    if dry_run:
        logger.info("Dry-run: would rewrite %s for block %s", path, block_name)
        return True

    await asyncio.to_thread(write_source, path, updated)
    logger.info("Rewrote %s (%s %s)", path, replacer.kind.value, block_name)
    return True
