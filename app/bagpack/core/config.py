"""bagpack configuration and settings.

This module provides the configuration model and I/O functions for
collection runs: command deadlines, the refresh interval, the outdated
failure policy, and alternate executables per manager.

Configuration is stored in ~/.config/bagpack/config.toml. Environment
variables take precedence over the file:

- BAGPACK_BREW_PATH: brew executable
- BAGPACK_NPM_PATH: npm executable
- BAGPACK_PIP_PATH: pip executable
- BAGPACK_PYTHON: interpreter used to run ``-m pip``
"""

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bagpack.collectors.base import OutdatedFailurePolicy
from bagpack.core.paths import get_config_path

logger = logging.getLogger(__name__)

# Environment variable -> config field
ENV_OVERRIDES: dict[str, str] = {
    "BAGPACK_BREW_PATH": "brew_path",
    "BAGPACK_NPM_PATH": "npm_path",
    "BAGPACK_PIP_PATH": "pip_path",
    "BAGPACK_PYTHON": "python_path",
}


class BagpackConfig(BaseModel):
    """Configuration for inventory collection.

    Attributes:
        command_timeout_seconds: Deadline for each package manager command.
        refresh_interval_hours: Period of scheduled refreshes.
        outdated_failure_policy: Whether a failed outdated check drops the
            manager ("fail") or marks its packages unknown ("downgrade").
        install_dates: Resolve install dates from package directories.
        brew_path: Alternate brew executable.
        npm_path: Alternate npm executable.
        pip_path: Alternate pip executable.
        python_path: Interpreter to run pip through (takes precedence over pip_path).
    """

    model_config = ConfigDict(extra="forbid")

    command_timeout_seconds: Annotated[
        float,
        Field(gt=0, le=3600, description="Per-command timeout in seconds"),
    ] = 120.0
    refresh_interval_hours: Annotated[
        float,
        Field(gt=0, le=720, description="Hours between scheduled refreshes"),
    ] = 24.0
    outdated_failure_policy: Annotated[
        OutdatedFailurePolicy,
        Field(description="Reaction to a failed outdated check"),
    ] = OutdatedFailurePolicy.FAIL
    install_dates: Annotated[
        bool,
        Field(description="Resolve install dates from the filesystem"),
    ] = True
    brew_path: str | None = None
    npm_path: str | None = None
    pip_path: str | None = None
    python_path: str | None = None


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> BagpackConfig:
    """Load configuration from a TOML file and the environment.

    A missing file yields the defaults.

    Args:
        path: Path to the config file. If None, uses the default config path.
        environ: Environment mapping. If None, uses os.environ.

    Returns:
        Validated BagpackConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()
    env = os.environ if environ is None else environ

    data: dict[str, object] = {}
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config: {e}") from e
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    for env_var, field_name in ENV_OVERRIDES.items():
        value = env.get(env_var)
        if value:
            logger.debug("Using %s from %s", field_name, env_var)
            data[field_name] = value

    try:
        return BagpackConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: BagpackConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The BagpackConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null; unset paths are omitted
    data = config.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
