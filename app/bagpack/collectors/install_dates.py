"""Best-effort install date lookup.

Each manager stores installed packages under a predictable directory
(Homebrew's Cellar, npm's global ``node_modules``, pip's ``*.dist-info``
folders). The creation time of that directory, or its modification time
where the filesystem does not record creation, is used as the install
date. Lookups never raise: a missing or unreadable path yields None.
"""

import logging
import os
import re
import site
import sysconfig
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from bagpack.models.package import PackageManager

logger = logging.getLogger(__name__)

# Well-known Homebrew Cellar locations (Apple Silicon, Intel, Linuxbrew)
_BREW_CELLARS: tuple[str, ...] = (
    "/opt/homebrew/Cellar",
    "/usr/local/Cellar",
    "/home/linuxbrew/.linuxbrew/Cellar",
)

# Well-known global node_modules locations
_NPM_ROOTS: tuple[str, ...] = (
    "/usr/local/lib/node_modules",
    "/opt/homebrew/lib/node_modules",
    "/usr/lib/node_modules",
)

_DIST_NAME_SEPARATORS = re.compile(r"[-_.]+")


class InstallDateResolver(Protocol):
    """Looks up when a package was installed."""

    def resolve(self, manager: PackageManager, name: str, version: str) -> str | None:
        """Return an ISO-8601 UTC timestamp, or None if unavailable."""
        ...


class NullInstallDateResolver:
    """Resolver that never knows an install date."""

    def resolve(self, manager: PackageManager, name: str, version: str) -> str | None:
        return None


class FilesystemInstallDateResolver:
    """Resolves install dates from package directories on disk.

    Attributes:
        roots: Directories searched per manager, in priority order.
    """

    def __init__(self, roots: dict[PackageManager, list[Path]] | None = None) -> None:
        """Initialize the resolver.

        Args:
            roots: Search roots per manager. Missing managers use the
                platform defaults from ``default_roots()``.
        """
        self.roots = {**default_roots(), **(roots or {})}

    def resolve(self, manager: PackageManager, name: str, version: str) -> str | None:
        """Return the timestamp of the first existing package directory.

        Args:
            manager: Manager that reported the package.
            name: Package name.
            version: Installed version.

        Returns:
            ISO-8601 UTC timestamp, or None if no candidate path exists.
        """
        for path in self.candidates(manager, name, version):
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            except OSError as e:
                logger.debug("Cannot stat %s: %s", path, e)
                continue

            timestamp = getattr(stat, "st_birthtime", None) or stat.st_mtime
            return (
                datetime.fromtimestamp(timestamp, tz=UTC).isoformat().replace("+00:00", "Z")
            )
        return None

    def candidates(self, manager: PackageManager, name: str, version: str) -> list[Path]:
        """List the paths that may hold the package, most specific first."""
        paths: list[Path] = []
        for root in self.roots.get(manager, []):
            if manager is PackageManager.BREW:
                paths.extend([root / name / version, root / name])
            elif manager is PackageManager.NPM:
                paths.append(root / name)
            else:
                paths.extend(root / f"{dist}-{version}.dist-info" for dist in _dist_names(name))
        return paths


def default_roots() -> dict[PackageManager, list[Path]]:
    """Return the platform default search roots for each manager.

    ``HOMEBREW_CELLAR`` and ``NPM_CONFIG_PREFIX`` take precedence over
    the well-known locations.
    """
    brew = [Path(p) for p in _BREW_CELLARS]
    cellar = os.environ.get("HOMEBREW_CELLAR")
    if cellar:
        brew.insert(0, Path(cellar))

    npm = [Path(p) for p in _NPM_ROOTS]
    prefix = os.environ.get("NPM_CONFIG_PREFIX")
    if prefix:
        npm.insert(0, Path(prefix) / "lib" / "node_modules")

    pip = [Path(sysconfig.get_paths()["purelib"]), Path(site.getusersitepackages())]

    return {PackageManager.BREW: brew, PackageManager.NPM: npm, PackageManager.PIP: pip}


def _dist_names(name: str) -> list[str]:
    """Return plausible ``.dist-info`` name prefixes for a distribution."""
    underscored = _DIST_NAME_SEPARATORS.sub("_", name)
    names = [name, underscored, underscored.lower()]
    return list(dict.fromkeys(names))
