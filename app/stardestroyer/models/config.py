"""Configuration models for declared code blocks.

This module defines the Pydantic models representing destroy.config.json,
which lists the blocks of a project, the files they own and the packages
they need.
"""

import copy
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

# Excludes the package install directory when no ignore list is configured
DEFAULT_IGNORE: tuple[str, ...] = ("node_modules/**",)


def _unique(values: list[str]) -> list[str]:
    """Drop duplicate entries, keeping the first occurrence."""
    return list(dict.fromkeys(values))


def _overlay(source: dict[str, Any], current: dict[str, Any]) -> dict[str, Any]:
    """Apply current values to source, keeping the key order of source.

    Keys already in source stay in place, new keys are appended and
    keys missing from current are kept as they were.
    """
    merged = dict(source)
    for key, value in current.items():
        previous = merged.get(key)
        if isinstance(previous, dict) and isinstance(value, dict):
            merged[key] = _overlay(previous, value)
        else:
            merged[key] = value
    return merged


class BlockConfig(BaseModel):
    """Declaration of a single named block.

    Attributes:
        removed: Whether the block has been destroyed.
        paths: Files and folders owned by the block, relative to the project root.
        block_dependencies: Other blocks this block requires.
        dependencies: Runtime packages used by the block.
        dev_dependencies: Development packages used by the block.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    removed: Annotated[bool, Field(description="Block has been destroyed")] = False
    paths: Annotated[
        list[str],
        Field(default_factory=list, description="Files and folders owned by the block"),
    ]
    block_dependencies: Annotated[
        list[str],
        Field(
            default_factory=list,
            alias="blockDependencies",
            description="Blocks required by this block",
        ),
    ]
    dependencies: Annotated[
        list[str],
        Field(default_factory=list, description="Runtime packages"),
    ]
    dev_dependencies: Annotated[
        list[str],
        Field(
            default_factory=list,
            alias="devDependencies",
            description="Development packages",
        ),
    ]

    @field_validator("block_dependencies", "dependencies", "dev_dependencies")
    @classmethod
    def validate_unique(cls, value: list[str]) -> list[str]:
        """Treat dependency lists as ordered sets."""
        return _unique(value)

    @property
    def packages(self) -> list[str]:
        """All packages of the block, runtime first, without duplicates."""
        return _unique([*self.dependencies, *self.dev_dependencies])


class ProjectConfig(BaseModel):
    """Complete block registry of a project.

    Attributes:
        blocks: Block declarations keyed by block name, in registry order.
        blocks_in_use: Blocks the project keeps. Everything else is
            redundant and may be destroyed without naming it.
        ignore: Glob patterns of files excluded from rewriting.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    blocks_in_use: Annotated[
        list[str] | None,
        Field(alias="blocksInUse", description="Blocks kept by the project"),
    ] = None
    blocks: Annotated[
        dict[str, BlockConfig],
        Field(default_factory=dict, description="Declared blocks"),
    ]
    ignore: Annotated[
        list[str] | None,
        Field(description="Glob patterns excluded from rewriting"),
    ] = None

    # Parsed file content the model was loaded from
    _source: dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_data(cls, data: Any) -> "ProjectConfig":
        """Validate parsed file content and remember it for saving.

        Raises:
            ValidationError: If the content doesn't match the schema.
        """
        config = cls.model_validate(data)
        if isinstance(data, dict):
            config._source = copy.deepcopy(data)
        return config

    @field_validator("blocks_in_use")
    @classmethod
    def validate_blocks_in_use(cls, value: list[str] | None) -> list[str] | None:
        """Treat blocksInUse as an ordered set."""
        return None if value is None else _unique(value)

    @property
    def ignore_patterns(self) -> list[str]:
        """Effective ignore patterns, falling back to the defaults."""
        if self.ignore is None:
            return list(DEFAULT_IGNORE)
        return list(self.ignore)

    @property
    def removed_blocks(self) -> dict[str, BlockConfig]:
        """Blocks that have been destroyed."""
        return {name: block for name, block in self.blocks.items() if block.removed}

    @property
    def active_blocks(self) -> dict[str, BlockConfig]:
        """Blocks that have not been destroyed."""
        return {name: block for name, block in self.blocks.items() if not block.removed}

    def has_block(self, name: str) -> bool:
        """Check if a block is declared."""
        return name in self.blocks

    def to_data(self) -> dict[str, object]:
        """Convert the configuration to plain data using the on-disk key names.

        Only keys present in the loaded file or assigned since are written.
        When the config came from :meth:`from_data`, changes are laid over
        the loaded content, so keys keep their original order and new keys
        such as ``removed`` are appended to their block.
        """
        current = self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        return _overlay(self._source, current)
