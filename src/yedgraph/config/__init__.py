"""
yedgraph.config - Configuration loading and defaults

Configuration lives in ``.yedgraph.toml``, found by walking up from the
working directory. Values are merged over DEFAULT_CONFIG, then
``YEDGRAPH_<TABLE>_<KEY>`` environment variables are applied on top.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from yedgraph.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX, EXPORT_FORMATS


class ConfigError(ValueError):
    """The configuration file is unreadable or has invalid values."""


def find_config_file(start: Path | None = None) -> Path | None:
    """Find .yedgraph.toml in start or any parent directory.

    Args:
        start: Directory to start from (defaults to cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge overrides into a copy of defaults.

    Nested tables are merged key by key; any other value replaces the default.
    """
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a TOML config file merged over the defaults.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
        user_config = tomlkit.parse(content).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
    return merge_configs(DEFAULT_CONFIG, user_config)


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value into bool, int, JSON list/object, or string."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.lstrip("-").isdigit():
        return int(value)
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply YEDGRAPH_<TABLE>_<KEY> environment variables to config.

    The first underscore-separated part after the prefix names the table,
    the rest names the key (``YEDGRAPH_BUILD_STRICT_GROUPS`` sets
    ``build.strict_groups``).
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        table, key = parts
        section = config.setdefault(table, {})
        if isinstance(section, dict):
            section[key] = _try_parse_env_value(raw)
    return config


def validate_config(config: dict[str, Any]) -> list[str]:
    """Check configuration values.

    Returns:
        List of human-readable problems (empty if valid).
    """
    errors: list[str] = []
    build = config.get("build", {})
    for key in ("strict_groups", "allow_duplicate_ids"):
        # 0/1 from environment overrides count as booleans
        if key in build and build[key] not in (True, False):
            errors.append(f"build.{key} must be true or false")

    export = config.get("export", {})
    fmt = export.get("format")
    if fmt is not None and fmt not in EXPORT_FORMATS:
        errors.append(f"export.format must be one of {', '.join(EXPORT_FORMATS)}, got '{fmt}'")
    indent = export.get("indent")
    if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int)):
        errors.append("export.indent must be an integer")
    return errors


def get_config(config_path: Path | None = None, start_dir: Path | None = None) -> dict[str, Any]:
    """Resolve the effective configuration.

    Args:
        config_path: Explicit config file (optional).
        start_dir: Where to start searching when config_path is None.

    Returns:
        Merged configuration with environment overrides applied.

    Raises:
        ConfigError: If the file is unreadable or holds invalid values.
    """
    if config_path is None:
        config_path = find_config_file(start_dir)

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        config = load_config(config_path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    config = _apply_env_overrides(config)
    errors = validate_config(config)
    if errors:
        raise ConfigError("; ".join(errors))
    return config


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "ConfigError",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "validate_config",
]
