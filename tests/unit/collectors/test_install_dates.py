"""Unit tests for install date resolution."""

import os
from pathlib import Path

import pytest
from bagpack.collectors.install_dates import (
    FilesystemInstallDateResolver,
    NullInstallDateResolver,
    default_roots,
)
from bagpack.models.package import PackageManager

# 2024-09-17T08:22:00Z
TIMESTAMP = 1726561320


def _touch_dir(path: Path) -> Path:
    path.mkdir(parents=True)
    os.utime(path, (TIMESTAMP, TIMESTAMP))
    return path


@pytest.fixture
def resolver(tmp_path: Path) -> FilesystemInstallDateResolver:
    """Resolver rooted in temporary directories only."""
    return FilesystemInstallDateResolver(
        roots={
            PackageManager.BREW: [tmp_path / "Cellar"],
            PackageManager.NPM: [tmp_path / "node_modules"],
            PackageManager.PIP: [tmp_path / "site-packages"],
        }
    )


class TestNullInstallDateResolver:
    """Tests for NullInstallDateResolver."""

    def test_always_none(self) -> None:
        """No install date is ever known."""
        assert NullInstallDateResolver().resolve(PackageManager.BREW, "wget", "1.0") is None


class TestFilesystemInstallDateResolver:
    """Tests for FilesystemInstallDateResolver."""

    def test_missing_path_returns_none(self, resolver: FilesystemInstallDateResolver) -> None:
        """Nothing on disk means no install date."""
        assert resolver.resolve(PackageManager.NPM, "typescript", "5.5.2") is None

    def test_brew_version_directory(
        self, resolver: FilesystemInstallDateResolver, tmp_path: Path
    ) -> None:
        """The Cellar version directory supplies the date."""
        _touch_dir(tmp_path / "Cellar" / "wget" / "1.24.5")

        installed_at = resolver.resolve(PackageManager.BREW, "wget", "1.24.5")

        assert installed_at is not None
        assert installed_at.endswith("Z")

    def test_npm_package_directory(
        self, resolver: FilesystemInstallDateResolver, tmp_path: Path
    ) -> None:
        """The global node_modules entry supplies the date."""
        _touch_dir(tmp_path / "node_modules" / "typescript")

        assert resolver.resolve(PackageManager.NPM, "typescript", "5.5.2") is not None

    def test_pip_dist_info_normalized_name(
        self, resolver: FilesystemInstallDateResolver, tmp_path: Path
    ) -> None:
        """Dashes in distribution names map to underscores in dist-info folders."""
        _touch_dir(tmp_path / "site-packages" / "typing_extensions-4.12.2.dist-info")

        assert resolver.resolve(PackageManager.PIP, "typing-extensions", "4.12.2") is not None

    def test_candidates_order(self, resolver: FilesystemInstallDateResolver, tmp_path: Path) -> None:
        """Brew candidates list the version directory first."""
        cellar = tmp_path / "Cellar"
        assert resolver.candidates(PackageManager.BREW, "jq", "1.7.1") == [
            cellar / "jq" / "1.7.1",
            cellar / "jq",
        ]

    def test_unlisted_manager_uses_defaults(self, tmp_path: Path) -> None:
        """Managers without explicit roots keep the platform defaults."""
        resolver = FilesystemInstallDateResolver(roots={PackageManager.NPM: [tmp_path]})

        assert resolver.roots[PackageManager.NPM] == [tmp_path]
        assert resolver.roots[PackageManager.BREW]


class TestDefaultRoots:
    """Tests for default_roots."""

    def test_env_overrides_take_precedence(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """HOMEBREW_CELLAR and NPM_CONFIG_PREFIX are searched first."""
        monkeypatch.setenv("HOMEBREW_CELLAR", str(tmp_path / "cellar"))
        monkeypatch.setenv("NPM_CONFIG_PREFIX", str(tmp_path / "prefix"))

        roots = default_roots()

        assert roots[PackageManager.BREW][0] == tmp_path / "cellar"
        assert roots[PackageManager.NPM][0] == tmp_path / "prefix" / "lib" / "node_modules"

    def test_every_manager_has_roots(self) -> None:
        """All managers get at least one search root."""
        roots = default_roots()
        assert all(roots[manager] for manager in PackageManager)
