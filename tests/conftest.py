"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from unittest.mock import MagicMock

import pytest
from bagpack.utils.shell import CommandExecutor


@pytest.fixture
def executor() -> MagicMock:
    """CommandExecutor substitute; set ``run.side_effect`` per test."""
    return MagicMock(spec=CommandExecutor)


@pytest.fixture
def mock_brew_list_output() -> str:
    """Sample ``brew list --versions`` output."""
    return """wget 1.24.5
git 2.45.2
python@3.12 3.12.3 3.12.4
jq 1.7.1"""


@pytest.fixture
def mock_brew_outdated_output() -> str:
    """Sample ``brew outdated --json=v2`` output."""
    return """{
  "formulae": [
    {"name": "wget", "installed_versions": ["1.24.5"], "current_version": "1.24.6",
     "latest_version": "1.24.6", "pinned": false, "pinned_version": null},
    {"name": "git", "installed_versions": ["2.45.2"], "current_version": "2.46.0",
     "pinned": false, "pinned_version": null}
  ],
  "casks": []
}"""


@pytest.fixture
def mock_npm_list_output() -> str:
    """Sample ``npm ls -g --depth=0 --json`` output."""
    return """{
  "name": "lib",
  "dependencies": {
    "typescript": {"version": "5.5.2", "overridden": false},
    "npm": {"version": "10.8.1", "overridden": false},
    "broken-link": {"missing": true}
  }
}"""


@pytest.fixture
def mock_npm_outdated_output() -> str:
    """Sample ``npm outdated -g --json`` output."""
    return """{
  "typescript": {"current": "5.5.2", "wanted": "5.6.3", "latest": "5.6.3",
                 "location": "/usr/local/lib/node_modules/typescript"}
}"""


@pytest.fixture
def mock_pip_list_output() -> str:
    """Sample ``pip list --format=json`` output."""
    return (
        '[{"name": "requests", "version": "2.32.3"}, '
        '{"name": "pip", "version": "24.0"}, '
        '{"name": "urllib3", "version": "2.2.1"}]'
    )


@pytest.fixture
def mock_pip_outdated_output() -> str:
    """Sample ``pip list --outdated --format=json`` output."""
    return (
        '[{"name": "pip", "version": "24.0", "latest_version": "24.2", '
        '"latest_filetype": "wheel"}]'
    )
