"""Snapshot models and the inventory document format.

This module defines the immutable aggregate produced by one collection
run and its JSON document representation::

    {
      "generatedAt": "<ISO-8601 UTC>",
      "managers": {"brew": [...], "npm": [...], "pip": [...]}
    }
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from bagpack.models.package import PackageManager, PackageRecord, PackageStatus


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime as ISO-8601 UTC with a ``Z`` suffix."""
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given.

    Raises:
        ValueError: If the value is not a valid ISO-8601 timestamp.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class InventorySnapshot:
    """Immutable point-in-time aggregate of all collected packages.

    Attributes:
        generated_at: When the collection run started (aware, UTC).
        packages: Records in manager enumeration order, then discovery order.
            Name collisions across managers are kept as separate records.
    """

    generated_at: datetime
    packages: tuple[PackageRecord, ...] = ()

    def __post_init__(self) -> None:
        """Validate snapshot data after initialization."""
        if self.generated_at.tzinfo is None:
            msg = "generated_at must be timezone-aware"
            raise ValueError(msg)

    @property
    def outdated_count(self) -> int:
        """Number of packages flagged as outdated."""
        return sum(1 for pkg in self.packages if pkg.is_outdated)

    def by_manager(self) -> dict[PackageManager, list[PackageRecord]]:
        """Group records by manager, keeping every manager key."""
        grouped: dict[PackageManager, list[PackageRecord]] = {m: [] for m in PackageManager}
        for pkg in self.packages:
            grouped[pkg.manager].append(pkg)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        """Convert to the inventory document for JSON serialization."""
        return {
            "generatedAt": format_timestamp(self.generated_at),
            "managers": {
                manager.value: [_record_to_dict(pkg) for pkg in records]
                for manager, records in self.by_manager().items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InventorySnapshot":
        """Create an InventorySnapshot from an inventory document.

        Args:
            data: Parsed JSON document.

        Returns:
            InventorySnapshot with records in manager enumeration order.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If a value is invalid.
        """
        managers: dict[str, Any] = data["managers"]
        unknown = set(managers) - {m.value for m in PackageManager}
        if unknown:
            msg = f"Unknown managers in document: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        packages: list[PackageRecord] = []
        for manager in PackageManager:
            for entry in managers.get(manager.value, []):
                packages.append(_record_from_dict(entry, manager))

        return cls(
            generated_at=parse_timestamp(data["generatedAt"]),
            packages=tuple(packages),
        )


@dataclass(frozen=True, slots=True)
class CollectionWarning:
    """Non-fatal failure of one manager during a collection run.

    Attributes:
        manager: Manager whose collector failed.
        message: Description of the first failure.
    """

    manager: PackageManager
    message: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"manager": self.manager.value, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionWarning":
        """Create a CollectionWarning from a dictionary."""
        return cls(manager=PackageManager(data["manager"]), message=str(data["message"]))


@dataclass(frozen=True, slots=True)
class CollectionSummary:
    """Result of one aggregation run.

    Attributes:
        snapshot: The collected inventory.
        warnings: At most one warning per manager, in enumeration order.
    """

    snapshot: InventorySnapshot
    warnings: tuple[CollectionWarning, ...] = field(default_factory=tuple)

    @property
    def has_warnings(self) -> bool:
        """Check if any manager failed during the run."""
        return bool(self.warnings)

    def warning_for(self, manager: PackageManager) -> CollectionWarning | None:
        """Return the warning reported for ``manager``, if any."""
        for warning in self.warnings:
            if warning.manager == manager:
                return warning
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the inventory document plus a ``warnings`` list."""
        data = self.snapshot.to_dict()
        data["warnings"] = [w.to_dict() for w in self.warnings]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionSummary":
        """Create a CollectionSummary from a document; ``warnings`` is optional."""
        return cls(
            snapshot=InventorySnapshot.from_dict(data),
            warnings=tuple(CollectionWarning.from_dict(w) for w in data.get("warnings", [])),
        )

    @classmethod
    def create(
        cls,
        generated_at: datetime,
        packages: Iterable[PackageRecord],
        warnings: Iterable[CollectionWarning] = (),
    ) -> "CollectionSummary":
        """Build a summary from collected records and warnings."""
        return cls(
            snapshot=InventorySnapshot(generated_at=generated_at, packages=tuple(packages)),
            warnings=tuple(warnings),
        )


def _record_to_dict(pkg: PackageRecord) -> dict[str, Any]:
    """Convert a PackageRecord to its document representation.

    The manager is implied by the enclosing ``managers`` key.
    """
    return {
        "name": pkg.name,
        "currentVersion": pkg.current_version,
        "latestVersion": pkg.latest_version,
        "installedAt": pkg.installed_at,
        "status": pkg.status.to_wire(),
    }


def _record_from_dict(data: dict[str, Any], manager: PackageManager) -> PackageRecord:
    """Create a PackageRecord from its document representation."""
    return PackageRecord(
        name=data["name"],
        current_version=data["currentVersion"],
        latest_version=data.get("latestVersion"),
        installed_at=data.get("installedAt"),
        status=PackageStatus.from_wire(data["status"]),
        manager=manager,
    )
