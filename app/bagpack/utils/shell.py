"""Shell execution utilities.

Provides subprocess execution with exit-code allow-lists and a
per-command deadline. This is the only place bagpack crosses the
process boundary; collectors depend on it through ``CommandExecutor``.
"""

import logging
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Default deadline for a single package manager invocation.
DEFAULT_TIMEOUT: float = 120.0


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int


class CommandFailure(Exception):
    """Raised when an external command exits with a disallowed code.

    ``exit_code`` is None when the process could not be started at all.
    """

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        exit_code: int | None,
        stderr: str,
    ) -> None:
        self.program = program
        self.args_list = list(args)
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(self._describe())

    @property
    def command_line(self) -> str:
        """Return the command as a single display string."""
        return " ".join([self.program, *self.args_list])

    def _describe(self) -> str:
        detail = self.stderr.strip() or "no error output"
        if self.exit_code is None:
            return f"{self.command_line} could not be run: {detail}"
        return f"{self.command_line} failed (exit {self.exit_code}): {detail}"


class CommandTimeout(CommandFailure):
    """Raised when an external command exceeds its deadline."""

    def __init__(self, program: str, args: Sequence[str], timeout: float) -> None:
        self.timeout = timeout
        super().__init__(program, args, None, f"timed out after {timeout:g}s")


def run_command(
    args: list[str],
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        timeout: Maximum time in seconds to wait for command.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Absolute or relative paths are accepted as well.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


class CommandExecutor:
    """Runs one external command per call with an exit-code allow-list.

    Example:
        >>> executor = CommandExecutor(timeout=30.0)
        >>> result = executor.run("npm", ["outdated", "-g", "--json"], allowed_exit_codes=(0, 1))
    """

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        """Initialize the executor.

        Args:
            timeout: Per-command deadline in seconds. None disables it.
        """
        self.timeout = timeout

    def run(
        self,
        program: str,
        args: Sequence[str],
        allowed_exit_codes: Sequence[int] = (0,),
    ) -> CommandResult:
        """Run ``program`` with ``args`` and capture its output.

        Args:
            program: Executable name or path.
            args: Arguments passed to the executable.
            allowed_exit_codes: Exit codes that count as success.

        Returns:
            CommandResult with the full stdout and stderr.

        Raises:
            CommandTimeout: If the command exceeds the deadline.
            CommandFailure: If the command cannot start or exits with a
                code outside ``allowed_exit_codes``.
        """
        logger.debug("Running: %s %s", program, " ".join(args))
        try:
            result = run_command([program, *args], timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise CommandTimeout(program, args, self.timeout or 0.0) from e
        except OSError as e:
            raise CommandFailure(program, args, None, str(e)) from e

        if result.returncode not in allowed_exit_codes:
            raise CommandFailure(program, args, result.returncode, result.stderr)

        return result
