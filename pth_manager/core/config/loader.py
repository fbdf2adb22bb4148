"""
Configuration loader — reads the environment into a ScopeConfig.

The environment (normally populated by direnv from a project's
``.envrc``) is the primary source. An optional YAML file supplies
defaults; environment variables always win over file values.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from pth_manager.core.errors import ConfigError
from pth_manager.core.models.config import ScopeConfig

logger = logging.getLogger(__name__)

# ── Environment variable names ──────────────────────────────────

ENV_PROJECT_ROOT = "PTH_MANAGER_ROOT"
ENV_INJECT_TRIGGER = "SHOULD_INJECT_PTH_FILE"
ENV_DEV_LIBRARY = "DEV_SITE_PACKAGES_DIR"
ENV_FILE_NAME = "PTH_FILE_NAME"
ENV_DEBUG = "DEBUG"
ENV_PYTHON = "PTH_MANAGER_PYTHON"
ENV_PROTECTED = "PTH_MANAGER_PROTECTED_PREFIXES"
ENV_CONFIG_FILE = "PTH_MANAGER_CONFIG"

# env var → ScopeConfig field
_ENV_FIELDS = {
    ENV_PROJECT_ROOT: "project_root",
    ENV_INJECT_TRIGGER: "inject_trigger",
    ENV_DEV_LIBRARY: "dev_library_path",
    ENV_FILE_NAME: "injection_file_name",
    ENV_DEBUG: "debug_enabled",
    ENV_PYTHON: "python",
}

# YAML key → ScopeConfig field
_FILE_FIELDS = {
    "project_root": "project_root",
    "inject_trigger": "inject_trigger",
    "dev_library_path": "dev_library_path",
    "injection_file_name": "injection_file_name",
    "debug": "debug_enabled",
    "python": "python",
    "protected_prefixes": "protected_prefixes",
}

_FLAG_FIELDS = ("inject_trigger", "debug_enabled")
_PATH_FIELDS = ("project_root", "dev_library_path")


def is_flag_set(value: Any) -> bool:
    """Interpret a trigger flag: only ``1`` / ``"1"`` / ``"true"`` enable it."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value) in ("1", "true")


def load_config(
    environ: Mapping[str, str] | None = None,
    path: Path | None = None,
) -> ScopeConfig:
    """Build a ScopeConfig from an optional YAML file plus the environment.

    Args:
        environ: Environment mapping (default: ``os.environ``).
        path: Explicit YAML file. Falls back to ``$PTH_MANAGER_CONFIG``.

    Returns:
        Validated ScopeConfig. Missing settings are left empty; whether
        that is fatal is decided by the controller.

    Raises:
        ConfigError: The file is unreadable/invalid, or a value is malformed.
    """
    env = os.environ if environ is None else environ

    raw: dict[str, Any] = {}
    if path is None and env.get(ENV_CONFIG_FILE):
        path = Path(env[ENV_CONFIG_FILE])
    if path is not None:
        raw.update(load_config_file(path))

    for var, field in _ENV_FIELDS.items():
        value = env.get(var)
        if value is not None and value != "":
            raw[field] = value

    extra = env.get(ENV_PROTECTED, "")
    if extra:
        prefixes = [p for p in extra.split(os.pathsep) if p]
        raw["protected_prefixes"] = [*raw.get("protected_prefixes", []), *prefixes]

    return _build(raw)


def load_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into ScopeConfig field names."""
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config file %s", path)

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    unknown = sorted(set(data) - set(_FILE_FIELDS))
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(unknown))

    return {_FILE_FIELDS[k]: v for k, v in data.items() if k in _FILE_FIELDS}


def _build(raw: dict[str, Any]) -> ScopeConfig:
    for field in _FLAG_FIELDS:
        if field in raw:
            raw[field] = is_flag_set(raw[field])

    for field in _PATH_FIELDS:
        if raw.get(field):
            raw[field] = _normalise_path(str(raw[field]))

    name = str(raw.get("injection_file_name") or "").strip()
    if name and (os.sep in name or (os.altsep and os.altsep in name) or name in (".", "..")):
        raise ConfigError(
            f"{ENV_FILE_NAME} must be a bare file name, got '{name}'"
        )
    if name:
        raw["injection_file_name"] = name

    try:
        return ScopeConfig.model_validate(raw)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _normalise_path(value: str) -> str:
    """Strip whitespace and redundant separators; symlinks are left alone."""
    value = os.path.expanduser(value.strip())
    return os.path.normpath(value) if value else ""
