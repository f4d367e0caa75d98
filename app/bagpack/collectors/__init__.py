"""Collectors for the supported package managers.

This module exports the collector classes that inventory globally
installed packages and their available updates.
"""

from bagpack.collectors.base import (
    Collector,
    CollectorError,
    CollectorResult,
    CollectorStep,
    OutdatedFailurePolicy,
    ParseFailure,
)
from bagpack.collectors.brew import BrewCollector
from bagpack.collectors.install_dates import (
    FilesystemInstallDateResolver,
    InstallDateResolver,
    NullInstallDateResolver,
)
from bagpack.collectors.npm import NpmCollector
from bagpack.collectors.pip import PipCollector

__all__ = [
    "BrewCollector",
    "Collector",
    "CollectorError",
    "CollectorResult",
    "CollectorStep",
    "FilesystemInstallDateResolver",
    "InstallDateResolver",
    "NpmCollector",
    "NullInstallDateResolver",
    "OutdatedFailurePolicy",
    "ParseFailure",
    "PipCollector",
]
