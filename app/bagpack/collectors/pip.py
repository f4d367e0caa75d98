"""pip collector implementation.

Lists installed distributions with ``pip list --format=json`` and
upgradable ones with ``pip list --outdated --format=json``.
"""

from bagpack.collectors.base import Collector, CollectorStep, OutdatedFailurePolicy
from bagpack.collectors.install_dates import InstallDateResolver
from bagpack.collectors.payloads import PIP_LIST, PIP_OUTDATED
from bagpack.models.package import PackageManager
from bagpack.utils.shell import CommandExecutor


class PipCollector(Collector):
    """Collector for globally installed Python distributions.

    When an interpreter is configured, pip is run as ``<python> -m pip``
    so the inventory matches that interpreter's environment.
    """

    default_program = "pip"

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        *,
        program: str | None = None,
        python: str | None = None,
        install_dates: InstallDateResolver | None = None,
        outdated_policy: OutdatedFailurePolicy = OutdatedFailurePolicy.FAIL,
    ) -> None:
        """Initialize the collector.

        Args:
            executor: Command executor.
            program: pip executable path, used when ``python`` is not set.
            python: Interpreter to run pip through.
            install_dates: Install-date resolver.
            outdated_policy: Behaviour when the outdated step fails.
        """
        super().__init__(
            executor,
            program=program,
            install_dates=install_dates,
            outdated_policy=outdated_policy,
        )
        self.python = python

    @property
    def manager(self) -> PackageManager:
        """Return PIP as the package manager."""
        return PackageManager.PIP

    @property
    def base_command(self) -> list[str]:
        if self.python:
            return [self.python, "-m", "pip"]
        return [self.program]

    @property
    def inventory_args(self) -> list[str]:
        return ["list", "--format=json"]

    @property
    def outdated_args(self) -> list[str]:
        return ["list", "--outdated", "--format=json"]

    def parse_inventory(self, stdout: str) -> dict[str, str]:
        """Parse the JSON array printed by ``pip list``.

        Raises:
            ParseFailure: If the output is not an array of name/version objects.
        """
        entries = self._load_json(stdout, CollectorStep.INVENTORY, PIP_LIST)
        return {entry.name: entry.version for entry in entries}

    def parse_outdated(self, stdout: str) -> dict[str, str]:
        """Parse the JSON array printed by ``pip list --outdated``.

        Blank output means nothing is outdated.
        """
        if not stdout.strip():
            return {}

        entries = self._load_json(stdout, CollectorStep.OUTDATED, PIP_OUTDATED)
        return {entry.name: entry.latest_version for entry in entries}
