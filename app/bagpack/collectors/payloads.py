"""Pydantic models for the JSON documents emitted by package managers.

Each manager has its own payload shapes; collectors validate command
output against these models and reject anything else as a ParseFailure.
Unknown extra fields are ignored since managers add fields over time.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# =============================================================================
# Homebrew
# =============================================================================


class BrewOutdatedFormula(_Payload):
    """One entry of ``brew outdated --json=v2`` ``formulae``."""

    name: str
    installed_versions: list[str] = Field(default_factory=list)
    current_version: str | None = None
    latest_version: str | None = None

    @property
    def newest(self) -> str | None:
        """Latest version, falling back to ``current_version``."""
        return self.latest_version or self.current_version or None


class BrewOutdatedPayload(_Payload):
    """Document printed by ``brew outdated --json=v2``."""

    formulae: list[BrewOutdatedFormula]


# =============================================================================
# npm
# =============================================================================


class NpmDependency(_Payload):
    """One entry of ``npm ls -g --json`` ``dependencies``."""

    version: str | None = None


class NpmListPayload(_Payload):
    """Document printed by ``npm ls -g --depth=0 --json``."""

    dependencies: dict[str, NpmDependency] = Field(default_factory=dict)


class NpmOutdatedEntry(_Payload):
    """One value of the ``npm outdated -g --json`` object."""

    current: str | None = None
    wanted: str | None = None
    latest: str | None = None


# =============================================================================
# pip
# =============================================================================


class PipListEntry(_Payload):
    """One element of ``pip list --format=json``."""

    name: str
    version: str


class PipOutdatedEntry(_Payload):
    """One element of ``pip list --outdated --format=json``."""

    name: str
    latest_version: str


BREW_OUTDATED = TypeAdapter(BrewOutdatedPayload)
NPM_LIST = TypeAdapter(NpmListPayload)
NPM_OUTDATED = TypeAdapter(dict[str, NpmOutdatedEntry])
PIP_LIST = TypeAdapter(list[PipListEntry])
PIP_OUTDATED = TypeAdapter(list[PipOutdatedEntry])
