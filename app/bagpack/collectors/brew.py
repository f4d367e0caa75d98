"""Homebrew collector implementation.

Lists installed formulae with ``brew list --versions`` (plain text)
and their available upgrades with ``brew outdated --json=v2``.
"""

import logging

from bagpack.collectors.base import Collector, CollectorStep
from bagpack.collectors.payloads import BREW_OUTDATED
from bagpack.models.package import PackageManager

logger = logging.getLogger(__name__)


class BrewCollector(Collector):
    """Collector for Homebrew formulae.

    ``brew list --versions`` prints ``name version [version...]`` per line
    when several versions are kept; the last one listed is reported.
    """

    default_program = "brew"

    @property
    def manager(self) -> PackageManager:
        """Return BREW as the package manager."""
        return PackageManager.BREW

    @property
    def inventory_args(self) -> list[str]:
        return ["list", "--versions"]

    @property
    def outdated_args(self) -> list[str]:
        return ["outdated", "--json=v2"]

    def parse_inventory(self, stdout: str) -> dict[str, str]:
        """Parse ``brew list --versions`` output.

        Args:
            stdout: One formula per line, whitespace separated.

        Returns:
            Mapping of formula name to installed version.
        """
        installed: dict[str, str] = {}
        for line in stdout.splitlines():
            parts = line.split()
            if not parts:
                continue
            if len(parts) < 2:
                logger.debug("Skipping brew line without version: %r", line[:100])
                continue
            installed[parts[0]] = parts[-1]
        return installed

    def parse_outdated(self, stdout: str) -> dict[str, str]:
        """Parse ``brew outdated --json=v2`` output.

        Blank output means nothing is outdated.

        Raises:
            ParseFailure: If the document has no ``formulae`` array.
        """
        if not stdout.strip():
            return {}

        payload = self._load_json(stdout, CollectorStep.OUTDATED, BREW_OUTDATED)
        return {
            formula.name: newest
            for formula in payload.formulae
            if (newest := formula.newest) is not None
        }
