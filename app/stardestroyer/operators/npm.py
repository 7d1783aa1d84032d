"""npm package operator implementation.

Uninstalls packages using ``npm uninstall``.
"""

import logging
import subprocess

from stardestroyer.operators.base import PackageOperator, UninstallResult
from stardestroyer.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class NpmOperator(PackageOperator):
    """Operator for npm projects.

    ``npm uninstall --no-save`` leaves package.json untouched and is used
    while a block can still be restored; ``npm uninstall --save`` also
    edits package.json.
    """

    # Timeout for npm operations (5 minutes)
    _NPM_TIMEOUT: float = 300.0

    @property
    def name(self) -> str:
        """Return the npm command name."""
        return "npm"

    def is_available(self) -> bool:
        """Check if npm is available."""
        return command_exists("npm")

    def uninstall(self, packages: list[str], save: bool) -> list[UninstallResult]:
        """Uninstall packages using npm uninstall.

        Args:
            packages: Package names to uninstall.
            save: If True, remove them from package.json as well.

        Returns:
            List of UninstallResult for each package.

        Raises:
            RuntimeError: If npm is not available.
        """
        if not packages:
            return []

        if self.dry_run:
            return [UninstallResult(package=p, success=True, dry_run=True) for p in packages]

        if not self.is_available():
            msg = "npm is not available on this system"
            raise RuntimeError(msg)

        args = ["npm", "uninstall", "--save" if save else "--no-save", *packages]
        logger.info("Executing npm uninstall for packages: %s (save=%s)", ", ".join(packages), save)

        try:
            result = run_command(args, timeout=self._NPM_TIMEOUT, cwd=self._project_root)
        except subprocess.TimeoutExpired:
            error = f"npm uninstall timed out after {self._NPM_TIMEOUT:.0f}s"
            return [UninstallResult(package=p, success=False, error=error) for p in packages]

        # npm treats the command as one transaction
        if result.success:
            return [UninstallResult(package=p, success=True, saved=save) for p in packages]

        error = result.error_message("npm uninstall failed")
        return [UninstallResult(package=p, success=False, error=error) for p in packages]
