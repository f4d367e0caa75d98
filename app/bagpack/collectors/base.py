"""Abstract base class for package manager collectors.

This module defines the Collector interface that the brew, npm and pip
collectors implement, together with the collector failure types.
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from bagpack.collectors.install_dates import InstallDateResolver, NullInstallDateResolver
from bagpack.core.normalize import normalize
from bagpack.models.package import PackageManager, PackageRecord
from bagpack.utils.shell import (
    CommandExecutor,
    CommandFailure,
    CommandResult,
    command_exists,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CollectorStep(str, Enum):
    """The two commands every collector runs, in order."""

    INVENTORY = "inventory"
    OUTDATED = "outdated"


class OutdatedFailurePolicy(str, Enum):
    """How a collector reacts when its outdated step fails.

    Attributes:
        FAIL: The whole collector fails; no records are reported.
        DOWNGRADE: Inventory is kept and every record is marked unknown.
    """

    FAIL = "fail"
    DOWNGRADE = "downgrade"


class CollectorError(Exception):
    """Base exception for collector failures that are reported as warnings."""


class ParseFailure(CollectorError):
    """Raised when command output does not match the expected shape."""

    def __init__(self, manager: PackageManager, step: CollectorStep, detail: str) -> None:
        self.manager = manager
        self.step = step
        self.detail = detail
        super().__init__(f"Failed to parse {manager.value} {step.value} output: {detail}")


@dataclass(frozen=True, slots=True)
class CollectorResult:
    """Records produced by one collector run.

    Attributes:
        manager: Manager the records belong to.
        records: Normalized records in discovery order.
        warning: Set when records were kept despite a failed outdated step.
    """

    manager: PackageManager
    records: tuple[PackageRecord, ...]
    warning: str | None = None


class Collector(ABC):
    """Abstract base class for all package manager collectors.

    A collector runs an inventory command, then an outdated command, and
    merges both into normalized records. All process access goes through
    the injected CommandExecutor.

    Example:
        >>> collector = BrewCollector()
        >>> if collector.is_available():
        ...     for pkg in collector.collect().records:
        ...         print(f"{pkg.name}: {pkg.current_version} -> {pkg.latest_version}")
    """

    # Executable used when no override is configured
    default_program: str = ""

    # Exit codes accepted from the outdated command
    outdated_exit_codes: tuple[int, ...] = (0,)

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        *,
        program: str | None = None,
        install_dates: InstallDateResolver | None = None,
        outdated_policy: OutdatedFailurePolicy = OutdatedFailurePolicy.FAIL,
    ) -> None:
        """Initialize the collector.

        Args:
            executor: Command executor. Defaults to one with the standard timeout.
            program: Executable path overriding ``default_program``.
            install_dates: Install-date resolver. Defaults to no resolution.
            outdated_policy: Behaviour when the outdated step fails.
        """
        self.executor = executor if executor is not None else CommandExecutor()
        self.program = program or self.default_program
        self.install_dates = (
            install_dates if install_dates is not None else NullInstallDateResolver()
        )
        self.outdated_policy = outdated_policy

    @property
    @abstractmethod
    def manager(self) -> PackageManager:
        """Return the package manager this collector handles."""

    @property
    def base_command(self) -> list[str]:
        """Return the executable and any fixed leading arguments."""
        return [self.program]

    @property
    @abstractmethod
    def inventory_args(self) -> list[str]:
        """Return the arguments listing installed packages."""

    @property
    @abstractmethod
    def outdated_args(self) -> list[str]:
        """Return the arguments listing packages with newer versions."""

    @abstractmethod
    def parse_inventory(self, stdout: str) -> dict[str, str]:
        """Parse inventory output into an ordered name -> version mapping.

        Raises:
            ParseFailure: If the output does not match the expected shape.
        """

    @abstractmethod
    def parse_outdated(self, stdout: str) -> dict[str, str]:
        """Parse outdated output into a name -> latest version mapping.

        Raises:
            ParseFailure: If the output does not match the expected shape.
        """

    def is_available(self) -> bool:
        """Check if the manager executable can be found."""
        return command_exists(self.base_command[0])

    def collect(self) -> CollectorResult:
        """Run both steps and return normalized records.

        Inventory entries with a blank name or version are skipped. The
        outdated step is skipped when nothing is installed.

        Returns:
            CollectorResult with one record per installed package.

        Raises:
            CommandFailure: If a command fails (subject to the outdated policy).
            ParseFailure: If output cannot be parsed (subject to the outdated policy).
        """
        installed = self._drop_incomplete(
            self.parse_inventory(self._run(CollectorStep.INVENTORY).stdout)
        )
        if not installed:
            logger.debug("%s reports no installed packages", self.manager.value)
            return CollectorResult(manager=self.manager, records=())

        try:
            latest = self.parse_outdated(self._run(CollectorStep.OUTDATED).stdout)
        except (CommandFailure, CollectorError) as e:
            if self.outdated_policy is OutdatedFailurePolicy.FAIL:
                raise
            logger.warning("%s outdated check failed, marking unknown: %s", self.manager.value, e)
            return CollectorResult(
                manager=self.manager,
                records=self._build_records(installed, {}, outdated_known=False),
                warning=str(e),
            )

        return CollectorResult(
            manager=self.manager,
            records=self._build_records(installed, latest, outdated_known=True),
        )

    def _drop_incomplete(self, installed: dict[str, str]) -> dict[str, str]:
        """Remove inventory entries whose name or version is blank."""
        kept = {
            name: version
            for name, version in installed.items()
            if name.strip() and version.strip()
        }
        if len(kept) != len(installed):
            logger.debug(
                "Skipping %d %s entries without name or version",
                len(installed) - len(kept),
                self.manager.value,
            )
        return kept

    def _run(self, step: CollectorStep) -> CommandResult:
        """Run the command for ``step`` through the executor."""
        program, *prefix = self.base_command
        if step is CollectorStep.INVENTORY:
            return self.executor.run(program, [*prefix, *self.inventory_args])
        return self.executor.run(
            program,
            [*prefix, *self.outdated_args],
            allowed_exit_codes=self.outdated_exit_codes,
        )

    def _build_records(
        self,
        installed: dict[str, str],
        latest: dict[str, str],
        *,
        outdated_known: bool,
    ) -> tuple[PackageRecord, ...]:
        return tuple(
            normalize(
                name,
                version,
                latest.get(name),
                self.install_dates.resolve(self.manager, name, version),
                self.manager,
                outdated_known=outdated_known,
            )
            for name, version in installed.items()
        )

    def _load_json(self, stdout: str, step: CollectorStep, adapter: TypeAdapter[T]) -> T:
        """Decode JSON output and validate it against a payload model.

        Args:
            stdout: Raw command output.
            step: Step that produced the output (for error messages).
            adapter: Pydantic adapter for the expected payload shape.

        Returns:
            The validated payload.

        Raises:
            ParseFailure: If the output is not JSON or has the wrong shape.
        """
        try:
            data: Any = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise ParseFailure(self.manager, step, f"invalid JSON: {e}") from e

        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            count = e.error_count()
            raise ParseFailure(
                self.manager, step, f"unexpected payload shape ({count} error(s))"
            ) from e
