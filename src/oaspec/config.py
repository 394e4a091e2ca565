"""Configuration loading with XDG paths and precedence resolution.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.oaspec/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- a :class:`~oaspec.models.GlobalConfig` JSON file
  holding default output and validation settings.
* **Project config** -- ``./oaspec.json`` next to the API description,
  usually checked into the repository.
* **Precedence resolution** -- :func:`resolve_options` merges CLI flags,
  environment variables, project config, and global config into the
  effective :class:`~oaspec.validation.options.ValidationOptions`.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from oaspec.exceptions import ConfigError
from oaspec.models import GlobalConfig
from oaspec.validation.options import ValidationOptions

_APP_NAME = "oaspec"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "oaspec.json"
_ENV_PREFIX = "OASPEC_"
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True on platforms that follow the XDG Base Directory spec (Linux/BSD)."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _xdg_dir(env_var: str, default_segments: tuple[str, ...], fallback: str) -> Path:
    if _is_xdg_platform():
        base = Path(os.environ.get(env_var) or Path.home().joinpath(*default_segments))
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if fallback:
            path = path / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/oaspec/`` (default ``~/.config/oaspec/``).
    On macOS/Windows: ``~/.oaspec/``.
    """
    return _xdg_dir("XDG_CONFIG_HOME", (".config",), "")


def get_data_dir() -> Path:
    """Return the data directory used for crash logs, creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/oaspec/`` (default ``~/.local/share/oaspec/``).
    On macOS/Windows: ``~/.oaspec/logs/``.
    """
    return _xdg_dir("XDG_DATA_HOME", (".local", "share"), "logs")


# --- Config files ---


def _read_json(path: Path, kind: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid {kind} config at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """Load the global configuration, or defaults when there is no file.

    Raises:
        ConfigError: If the file exists but is not valid JSON or fails
            model validation.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global")
    try:
        return GlobalConfig.model_validate(data)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``oaspec.json`` from *directory* (the working directory by default).

    Returns:
        The parsed JSON object, or ``None`` if there is no project config.

    Raises:
        ConfigError: If the file is not valid JSON or not an object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _parse_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"Invalid value for {name}: {raw!r} (expected true/false)")


def env_overrides() -> dict[str, Any]:
    """Collect ``OASPEC_<OPTION>`` environment variables into option overrides."""
    overrides: dict[str, Any] = {}
    for option, info in ValidationOptions.model_fields.items():
        env_name = _ENV_PREFIX + option.upper()
        raw = os.environ.get(env_name)
        if raw is None:
            continue
        if info.annotation is bool:
            overrides[option] = _parse_flag(env_name, raw)
        else:
            overrides[option] = raw
    return overrides


# --- Precedence resolution ---


def resolve_options(cli_overrides: Optional[dict[str, Any]] = None) -> ValidationOptions:
    """Resolve the effective validation options.

    Precedence (high to low):
        1. CLI flags (*cli_overrides*; ``None`` values are ignored)
        2. Environment variables (``OASPEC_SKIP_EXAMPLE_VALIDATION=1`` ...)
        3. Project config (``./oaspec.json``, ``validation`` key)
        4. User config (``~/.config/oaspec/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer holds an unknown option or an invalid value.
    """
    merged = load_global_config().validation.model_dump()

    project = load_project_config()
    if project is not None:
        section = project.get("validation", {})
        if not isinstance(section, dict):
            raise ConfigError("Invalid project config: 'validation' must be an object")
        merged.update(section)

    merged.update(env_overrides())
    merged.update({key: value for key, value in (cli_overrides or {}).items() if value is not None})

    try:
        return ValidationOptions.model_validate(merged)
    except PydanticValidationError as exc:
        raise ConfigError(f"Invalid validation options: {exc}") from exc
