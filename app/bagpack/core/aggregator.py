"""Inventory aggregation across all package managers.

Runs every collector concurrently and composes one CollectionSummary.
A failing collector contributes no packages and exactly one warning;
the run as a whole always produces a snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import UTC, datetime

from bagpack.collectors.base import Collector, CollectorResult
from bagpack.collectors.brew import BrewCollector
from bagpack.collectors.install_dates import (
    FilesystemInstallDateResolver,
    InstallDateResolver,
    NullInstallDateResolver,
)
from bagpack.collectors.npm import NpmCollector
from bagpack.collectors.pip import PipCollector
from bagpack.core.config import BagpackConfig
from bagpack.models.package import PackageRecord
from bagpack.models.snapshot import CollectionSummary, CollectionWarning
from bagpack.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)


class AggregationFailure(Exception):
    """Raised when no snapshot can be produced at all."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def default_collectors(config: BagpackConfig | None = None) -> list[Collector]:
    """Build the brew, npm and pip collectors in enumeration order.

    Args:
        config: Configuration to apply. If None, uses defaults.

    Returns:
        List of collectors sharing one executor.
    """
    config = config or BagpackConfig()
    executor = CommandExecutor(timeout=config.command_timeout_seconds)
    install_dates: InstallDateResolver = (
        FilesystemInstallDateResolver() if config.install_dates else NullInstallDateResolver()
    )
    policy = config.outdated_failure_policy

    return [
        BrewCollector(
            executor,
            program=config.brew_path,
            install_dates=install_dates,
            outdated_policy=policy,
        ),
        NpmCollector(
            executor,
            program=config.npm_path,
            install_dates=install_dates,
            outdated_policy=policy,
        ),
        PipCollector(
            executor,
            program=config.pip_path,
            python=config.python_path,
            install_dates=install_dates,
            outdated_policy=policy,
        ),
    ]


class InventoryAggregator:
    """Runs collectors concurrently and assembles a CollectionSummary.

    Collectors share no state; each returns its full result through a
    future and results are composed in collector order once all finish,
    so the snapshot order does not depend on completion order.

    Attributes:
        collectors: Collectors in snapshot order.
    """

    def __init__(
        self,
        collectors: Sequence[Collector] | None = None,
        *,
        max_workers: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the aggregator.

        Args:
            collectors: Collectors to run. Defaults to ``default_collectors()``.
            max_workers: Thread pool size. Defaults to one per collector.
            clock: Source of the ``generated_at`` timestamp.
        """
        self.collectors = list(collectors) if collectors is not None else default_collectors()
        self._max_workers = max_workers
        self._clock = clock

    def collect(self) -> CollectionSummary:
        """Run every collector once.

        ``generated_at`` is stamped when the run starts.

        Returns:
            CollectionSummary with packages from successful collectors and
            one warning per failed collector.

        Raises:
            AggregationFailure: If the worker pool cannot be used.
        """
        generated_at = self._clock()
        if not self.collectors:
            return CollectionSummary.create(generated_at, ())

        workers = self._max_workers or len(self.collectors)
        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="collector") as pool:
                futures = [pool.submit(c.collect) for c in self.collectors]
                outcomes = [self._outcome(c, f) for c, f in zip(self.collectors, futures)]
        except RuntimeError as e:
            raise AggregationFailure(f"Cannot run collectors: {e}") from e

        packages: list[PackageRecord] = []
        warnings: list[CollectionWarning] = []
        for collector, outcome in zip(self.collectors, outcomes):
            if isinstance(outcome, CollectionWarning):
                warnings.append(outcome)
                continue
            packages.extend(outcome.records)
            if outcome.warning is not None:
                warnings.append(CollectionWarning(collector.manager, outcome.warning))

        logger.info(
            "Collected %d packages (%d warning(s))",
            len(packages),
            len(warnings),
        )
        return CollectionSummary.create(generated_at, packages, warnings)

    @staticmethod
    def _outcome(
        collector: Collector,
        future: Future[CollectorResult],
    ) -> CollectorResult | CollectionWarning:
        """Wait for one collector and turn a failure into a warning."""
        try:
            return future.result()
        except Exception as e:
            logger.warning("%s collection failed: %s", collector.manager.value, e)
            logger.debug("Collector failure details", exc_info=True)
            return CollectionWarning(collector.manager, str(e) or type(e).__name__)
