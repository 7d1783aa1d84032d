"""Running the package manager as a subprocess."""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command.

    Attributes:
        stdout: Captured standard output.
        stderr: Captured standard error.
        returncode: Exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    def error_message(self, fallback: str) -> str:
        """Last non-empty stderr line, or fallback when stderr is silent."""
        lines = [line.strip() for line in self.stderr.splitlines() if line.strip()]
        return lines[-1] if lines else fallback


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: Path | str | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    A non-zero exit status is reported through the result, not raised.

    Args:
        args: Executable and its arguments.
        timeout: Seconds to wait before giving up, None to wait forever.
        cwd: Directory to run in. Defaults to the current directory.

    Returns:
        CommandResult of the finished process.

    Raises:
        subprocess.TimeoutExpired: If the command runs longer than timeout.
        FileNotFoundError: If the executable does not exist.
    """
    logger.debug("Running %s in %s", " ".join(args), cwd or ".")
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    if completed.returncode != 0:
        logger.debug("%s exited with status %d", args[0], completed.returncode)
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None
