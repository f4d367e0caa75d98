"""Locations of bagpack's user files.

Honours ``XDG_CONFIG_HOME``; everything lives in ``~/.config/bagpack/``
otherwise.
"""

import os
from pathlib import Path

APP_NAME = "bagpack"


def get_config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/bagpack``, defaulting to ``~/.config/bagpack``."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


def get_config_path() -> Path:
    """Return the path of ``config.toml``."""
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Return the path of the user's ``theme.toml`` override."""
    return get_config_dir() / "theme.toml"
