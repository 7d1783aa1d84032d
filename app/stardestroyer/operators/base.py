"""Abstract base class for package operators.

This module defines the interface of the package manager that
uninstalls the packages a removed block no longer needs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class UninstallResult:
    """Result of uninstalling a single package.

    Attributes:
        package: Name of the package.
        success: Whether the package manager reported success.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (nothing was uninstalled).
        saved: Whether the package manifest was updated.
    """

    package: str
    success: bool
    error: str | None = None
    dry_run: bool = False
    saved: bool = False


class PackageOperator(ABC):
    """Abstract base class for package managers.

    Attributes:
        project_root: Directory the package manager runs in.
        dry_run: If True, only report what would be uninstalled.

    Example:
        >>> operator = NpmOperator(project_root, dry_run=True)
        >>> if operator.is_available():
        ...     for result in operator.uninstall(["left-pad"], save=False):
        ...         print(f"{result.package}: {result.success}")
    """

    def __init__(self, project_root: Path | None = None, dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            project_root: Directory the package manager runs in.
            dry_run: If True, only simulate uninstalls.
        """
        self._project_root = project_root
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the package manager command name."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this package manager is available on the system."""

    @abstractmethod
    def uninstall(self, packages: list[str], save: bool) -> list[UninstallResult]:
        """Uninstall packages.

        Args:
            packages: Package names, in the order to pass them.
            save: If True, also remove them from the package manifest.
                If False, only remove the installed files.

        Returns:
            List of UninstallResult, one per package.

        Raises:
            RuntimeError: If the package manager is not available.
        """
