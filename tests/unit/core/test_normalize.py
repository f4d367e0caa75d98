"""Unit tests for record normalization."""

import pytest
from bagpack.core.normalize import derive_status, normalize
from bagpack.models.package import PackageManager, PackageStatus


class TestDeriveStatus:
    """Tests for derive_status."""

    @pytest.mark.parametrize(
        ("current", "latest", "expected"),
        [
            ("1.0", None, PackageStatus.CURRENT),
            ("1.0", "1.0", PackageStatus.CURRENT),
            ("1.0", "1.1", PackageStatus.OUTDATED),
            # No semantic ordering: any difference counts
            ("2.0", "1.9", PackageStatus.OUTDATED),
        ],
    )
    def test_known(self, current: str, latest: str | None, expected: PackageStatus) -> None:
        """Status follows exact string comparison."""
        assert derive_status(current, latest) == expected

    def test_unknown_when_check_did_not_run(self) -> None:
        """Without outdated data the status is UNKNOWN."""
        assert derive_status("1.0", "1.1", outdated_known=False) == PackageStatus.UNKNOWN


class TestNormalize:
    """Tests for normalize."""

    def test_trims_values(self) -> None:
        """Whitespace around values is removed before comparison."""
        record = normalize(" wget ", "1.24.5 ", " 1.24.5", None, PackageManager.BREW)

        assert record.name == "wget"
        assert record.current_version == "1.24.5"
        assert record.status == PackageStatus.CURRENT

    def test_blank_optionals_become_none(self) -> None:
        """Blank latest version and install date map to None."""
        record = normalize("jq", "1.7.1", "  ", "", PackageManager.BREW)

        assert record.latest_version is None
        assert record.installed_at is None

    def test_outdated(self) -> None:
        """A differing latest version marks the record outdated."""
        record = normalize(
            "typescript", "5.5.2", "5.6.3", "2025-02-11T15:10:30Z", PackageManager.NPM
        )

        assert record.status == PackageStatus.OUTDATED
        assert record.installed_at == "2025-02-11T15:10:30Z"

    def test_unknown_drops_latest(self) -> None:
        """When the outdated check failed, any latest version is dropped."""
        record = normalize(
            "pip", "24.0", "24.2", None, PackageManager.PIP, outdated_known=False
        )

        assert record.status == PackageStatus.UNKNOWN
        assert record.latest_version is None

    def test_blank_version_rejected(self) -> None:
        """A blank installed version is invalid."""
        with pytest.raises(ValueError):
            normalize("pip", "   ", None, None, PackageManager.PIP)
