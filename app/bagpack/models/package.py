"""Package models for inventory collection.

This module defines the core data structures for representing
globally installed packages from the supported managers (brew, npm, pip).
"""

from dataclasses import dataclass
from enum import Enum

# Wire representation of PackageStatus.UNKNOWN
UNKNOWN_STATUS_MARKER = "-"


class PackageManager(Enum):
    """Enumeration of supported package managers.

    Declaration order is the order managers appear in a snapshot.
    """

    BREW = "brew"
    NPM = "npm"
    PIP = "pip"

    @property
    def label(self) -> str:
        """Human-readable manager name."""
        return _MANAGER_LABELS[self]


_MANAGER_LABELS: dict[PackageManager, str] = {
    PackageManager.BREW: "Homebrew",
    PackageManager.NPM: "npm (global)",
    PackageManager.PIP: "pip (global)",
}


class PackageStatus(Enum):
    """Update status of an installed package.

    UNKNOWN means the outdated check could not run for the package.
    """

    CURRENT = "current"
    OUTDATED = "outdated"
    UNKNOWN = "unknown"

    def to_wire(self) -> str:
        """Return the document representation of this status."""
        if self is PackageStatus.UNKNOWN:
            return UNKNOWN_STATUS_MARKER
        return self.value

    @classmethod
    def from_wire(cls, value: str) -> "PackageStatus":
        """Parse a document status value.

        Raises:
            ValueError: If the value is not a known status.
        """
        if value == UNKNOWN_STATUS_MARKER:
            return cls.UNKNOWN
        if value == cls.UNKNOWN.value:
            msg = f"Unknown status must be serialized as {UNKNOWN_STATUS_MARKER!r}"
            raise ValueError(msg)
        return cls(value)


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """Represents one installed package as seen by one manager.

    Records are built by ``bagpack.core.normalize.normalize`` and are
    never mutated after creation.

    Attributes:
        name: Package name (e.g., 'wget', 'typescript', 'requests')
        current_version: Installed version reported by the manager
        latest_version: Newer version if one is known, None otherwise
        installed_at: ISO-8601 UTC install timestamp (best-effort), or None
        status: Derived update status
        manager: Package manager that reported this package
    """

    name: str
    current_version: str
    latest_version: str | None
    installed_at: str | None
    status: PackageStatus
    manager: PackageManager

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not self.current_version:
            msg = "Package version cannot be empty"
            raise ValueError(msg)

        has_newer = (
            self.latest_version is not None and self.latest_version != self.current_version
        )
        if self.status == PackageStatus.OUTDATED and not has_newer:
            msg = f"{self.name}: outdated status requires a differing latest version"
            raise ValueError(msg)
        if self.status == PackageStatus.CURRENT and has_newer:
            msg = f"{self.name}: current status conflicts with latest {self.latest_version}"
            raise ValueError(msg)
        if self.status == PackageStatus.UNKNOWN and self.latest_version is not None:
            msg = f"{self.name}: unknown status cannot carry a latest version"
            raise ValueError(msg)

    @property
    def is_outdated(self) -> bool:
        """Check if a newer version is available."""
        return self.status == PackageStatus.OUTDATED

    @property
    def is_unknown(self) -> bool:
        """Check if the update status could not be determined."""
        return self.status == PackageStatus.UNKNOWN
