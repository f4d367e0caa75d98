"""Unit tests for shell execution utilities."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from bagpack.utils.shell import (
    CommandExecutor,
    CommandFailure,
    CommandResult,
    CommandTimeout,
    command_exists,
    run_command,
)


class TestRunCommand:
    """Tests for run_command function."""

    @patch("bagpack.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command captures stdout, stderr and the exit code."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["brew", "list"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["text"] is True

    @patch("bagpack.utils.shell.subprocess.run")
    def test_passes_timeout(self, mock_run: MagicMock) -> None:
        """run_command forwards the timeout."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["pip", "list"], timeout=5.0)

        assert mock_run.call_args.kwargs["timeout"] == 5.0

    @patch("bagpack.utils.shell.subprocess.run")
    def test_nonzero_exit_does_not_raise(self, mock_run: MagicMock) -> None:
        """Exit codes are judged by the caller, not by subprocess."""
        mock_run.return_value = MagicMock(stdout="", stderr="boom", returncode=1)

        assert run_command(["npm", "outdated"]).returncode == 1
        assert mock_run.call_args.kwargs["check"] is False


class TestCommandExists:
    """Tests for command_exists function."""

    def test_existing_command(self) -> None:
        """command_exists returns True when which finds the command."""
        with patch("bagpack.utils.shell.shutil.which", return_value="/usr/bin/npm"):
            assert command_exists("npm") is True

    def test_missing_command(self) -> None:
        """command_exists returns False when which finds nothing."""
        with patch("bagpack.utils.shell.shutil.which", return_value=None):
            assert command_exists("brew") is False


class TestCommandExecutor:
    """Tests for CommandExecutor.run."""

    def test_returns_result_on_success(self) -> None:
        """A zero exit code returns the captured result."""
        expected = CommandResult(stdout="[]", stderr="", returncode=0)
        with patch("bagpack.utils.shell.run_command", return_value=expected) as mock_run:
            result = CommandExecutor(timeout=30.0).run("pip", ["list", "--format=json"])

        assert result == expected
        mock_run.assert_called_once_with(["pip", "list", "--format=json"], timeout=30.0)

    def test_disallowed_exit_code_raises(self) -> None:
        """An exit code outside the allow-list raises CommandFailure."""
        failed = CommandResult(stdout="", stderr="Error: boom\n", returncode=2)
        with patch("bagpack.utils.shell.run_command", return_value=failed):
            with pytest.raises(CommandFailure) as exc_info:
                CommandExecutor().run("brew", ["outdated", "--json=v2"])

        error = exc_info.value
        assert error.program == "brew"
        assert error.args_list == ["outdated", "--json=v2"]
        assert error.exit_code == 2
        assert error.stderr == "Error: boom\n"
        assert "brew outdated --json=v2 failed (exit 2): Error: boom" in str(error)

    def test_allowed_nonzero_exit_code(self) -> None:
        """Exit code 1 is accepted when it is in the allow-list."""
        outdated = CommandResult(stdout="{}", stderr="", returncode=1)
        with patch("bagpack.utils.shell.run_command", return_value=outdated):
            result = CommandExecutor().run(
                "npm", ["outdated", "-g", "--json"], allowed_exit_codes=(0, 1)
            )

        assert result.returncode == 1
        assert result.stdout == "{}"

    def test_zero_not_allowed_when_excluded(self) -> None:
        """The allow-list is exact; 0 fails if it is not listed."""
        result = CommandResult(stdout="", stderr="", returncode=0)
        with patch("bagpack.utils.shell.run_command", return_value=result):
            with pytest.raises(CommandFailure):
                CommandExecutor().run("npm", ["ls"], allowed_exit_codes=(1,))

    def test_missing_executable_raises(self) -> None:
        """A missing executable raises CommandFailure without exit code."""
        with patch(
            "bagpack.utils.shell.run_command",
            side_effect=FileNotFoundError(2, "No such file or directory", "brew"),
        ):
            with pytest.raises(CommandFailure) as exc_info:
                CommandExecutor().run("brew", ["list", "--versions"])

        assert exc_info.value.exit_code is None
        assert "could not be run" in str(exc_info.value)

    def test_timeout_raises(self) -> None:
        """A command exceeding the deadline raises CommandTimeout."""
        with patch(
            "bagpack.utils.shell.run_command",
            side_effect=subprocess.TimeoutExpired(cmd=["npm"], timeout=1.5),
        ):
            with pytest.raises(CommandTimeout) as exc_info:
                CommandExecutor(timeout=1.5).run("npm", ["ls", "-g"])

        assert isinstance(exc_info.value, CommandFailure)
        assert exc_info.value.timeout == 1.5
        assert "timed out after 1.5s" in str(exc_info.value)

    def test_runs_real_process(self) -> None:
        """The executor spawns a real child process."""
        result = CommandExecutor(timeout=10.0).run("sh", ["-c", "echo hello; exit 0"])

        assert result.stdout.strip() == "hello"
