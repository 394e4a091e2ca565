"""Shared test fixtures for oaspec.

Provides reusable fixtures for loading document fixtures, creating
isolated config environments and resetting output state. These
fixtures are automatically discovered by pytest and available to all
test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from oaspec.output import reset_output
from oaspec.parser import decode, load_raw
from oaspec.spec import Document
from oaspec.validation import ValidationOptions


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file"). Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_yaml_path() -> Path:
    return FIXTURES_DIR / "petstore.yaml"


@pytest.fixture
def petstore_json_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_yaml_path: Path) -> dict[str, Any]:
    """Raw petstore tree (plain dicts) loaded from the YAML fixture."""
    return load_raw(str(petstore_yaml_path))


@pytest.fixture
def petstore(petstore_raw: dict[str, Any]) -> Document:
    """Decoded petstore document."""
    return decode(petstore_raw)


@pytest.fixture
def minimal_raw() -> dict[str, Any]:
    """The smallest tree the validator accepts without findings."""
    return {
        "openapi": "3.1.0",
        "info": {"title": "Minimal", "version": "1.0.0"},
        "paths": {},
    }


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Forces XDG path resolution, points XDG_CONFIG_HOME and XDG_DATA_HOME at
    subdirectories of tmp_path so that tests never touch real user config,
    clears all OASPEC_* environment variables and changes the working
    directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("oaspec.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for option in ValidationOptions.model_fields:
        monkeypatch.delenv(f"OASPEC_{option.upper()}", raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


