"""npm collector implementation.

Lists globally installed packages with ``npm ls -g --depth=0 --json``
and their newer releases with ``npm outdated -g --json``.
"""

import logging

from bagpack.collectors.base import Collector, CollectorStep
from bagpack.collectors.payloads import NPM_LIST, NPM_OUTDATED
from bagpack.models.package import PackageManager

logger = logging.getLogger(__name__)


class NpmCollector(Collector):
    """Collector for global npm packages.

    ``npm outdated`` exits with code 1 whenever it finds outdated
    packages, so 1 is accepted alongside 0.
    """

    default_program = "npm"
    outdated_exit_codes = (0, 1)

    @property
    def manager(self) -> PackageManager:
        """Return NPM as the package manager."""
        return PackageManager.NPM

    @property
    def inventory_args(self) -> list[str]:
        return ["ls", "-g", "--depth=0", "--json"]

    @property
    def outdated_args(self) -> list[str]:
        return ["outdated", "-g", "--json"]

    def parse_inventory(self, stdout: str) -> dict[str, str]:
        """Parse the ``dependencies`` object of ``npm ls --json``.

        Entries without a version (e.g. missing or invalid installs) are skipped.

        Raises:
            ParseFailure: If the output is not a JSON object of the expected shape.
        """
        payload = self._load_json(stdout, CollectorStep.INVENTORY, NPM_LIST)

        installed: dict[str, str] = {}
        for name, dependency in payload.dependencies.items():
            if not dependency.version:
                logger.debug("Skipping npm package without version: %s", name)
                continue
            installed[name] = dependency.version
        return installed

    def parse_outdated(self, stdout: str) -> dict[str, str]:
        """Parse the name-keyed object printed by ``npm outdated --json``.

        Blank output means nothing is outdated.
        """
        if not stdout.strip():
            return {}

        payload = self._load_json(stdout, CollectorStep.OUTDATED, NPM_OUTDATED)
        return {name: entry.latest for name, entry in payload.items() if entry.latest}
