"""Record normalization shared by all collectors.

Status derivation lives here so brew, npm and pip records compare
versions with identical semantics: exact string equality after
trimming. No semantic-version ordering is attempted.
"""

from bagpack.models.package import PackageManager, PackageRecord, PackageStatus


def derive_status(
    current_version: str,
    latest_version: str | None,
    *,
    outdated_known: bool = True,
) -> PackageStatus:
    """Derive the update status from installed and latest versions.

    Args:
        current_version: Trimmed installed version.
        latest_version: Trimmed latest version, or None if absent.
        outdated_known: False if the outdated check did not run.

    Returns:
        UNKNOWN if the check did not run, OUTDATED if a differing latest
        version is present, CURRENT otherwise.
    """
    if not outdated_known:
        return PackageStatus.UNKNOWN
    if latest_version is not None and latest_version != current_version:
        return PackageStatus.OUTDATED
    return PackageStatus.CURRENT


def normalize(
    name: str,
    current_version: str,
    latest_version: str | None,
    installed_at: str | None,
    manager: PackageManager,
    *,
    outdated_known: bool = True,
) -> PackageRecord:
    """Build a PackageRecord from raw collector values.

    Blank optional values become None. When ``outdated_known`` is False
    any latest version is dropped and the record is marked UNKNOWN.

    Args:
        name: Package name as reported by the manager.
        current_version: Installed version as reported by the manager.
        latest_version: Latest version from the outdated step, if any.
        installed_at: ISO-8601 install timestamp, if resolved.
        manager: Manager that reported the package.
        outdated_known: Whether the outdated step produced data.

    Returns:
        Normalized, immutable PackageRecord.
    """
    current = current_version.strip()
    latest = _optional(latest_version) if outdated_known else None

    return PackageRecord(
        name=name.strip(),
        current_version=current,
        latest_version=latest,
        installed_at=_optional(installed_at),
        status=derive_status(current, latest, outdated_known=outdated_known),
        manager=manager,
    )


def _optional(value: str | None) -> str | None:
    """Trim a value, mapping blank strings to None."""
    if value is None:
        return None
    return value.strip() or None
