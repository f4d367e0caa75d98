"""Data models for bagpack.

This module exports the core data structures used throughout the application.
"""

from bagpack.models.package import (
    UNKNOWN_STATUS_MARKER,
    PackageManager,
    PackageRecord,
    PackageStatus,
)
from bagpack.models.snapshot import (
    CollectionSummary,
    CollectionWarning,
    InventorySnapshot,
)

__all__ = [
    "UNKNOWN_STATUS_MARKER",
    "CollectionSummary",
    "CollectionWarning",
    "InventorySnapshot",
    "PackageManager",
    "PackageRecord",
    "PackageStatus",
]
