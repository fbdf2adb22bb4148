"""
Status use case — read-only dump of configuration and session state.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pth_manager.adapters.base import Interpreter
from pth_manager.adapters.languages.python import PythonInterpreter
from pth_manager.core.config.loader import load_config
from pth_manager.core.errors import ConfigError
from pth_manager.core.models.config import ScopeConfig
from pth_manager.core.models.probe import Query
from pth_manager.core.models.state import RuntimeState
from pth_manager.core.persistence.state_file import (
    default_state_path,
    load_state,
    session_id,
)
from pth_manager.core.services.scope import find_nested_envrc, is_within_scope


@dataclass
class StatusResult:
    """Configuration and state as seen from the current directory."""

    config: ScopeConfig | None = None
    state: RuntimeState | None = None
    session: str = ""
    state_path: Path | None = None
    current_dir: str = ""
    in_scope: bool = False
    interpreter_version: str | None = None
    injection_file: str | None = None
    injection_file_exists: bool = False
    nested_envrc: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {
            "session": self.session,
            "state_path": str(self.state_path) if self.state_path else None,
            "current_dir": self.current_dir,
            "in_scope": self.in_scope,
            "interpreter_version": self.interpreter_version,
        }
        if self.error:
            result["error"] = self.error
        if self.config is not None:
            result["config"] = self.config.model_dump(mode="json")
        if self.state is not None:
            result["state"] = self.state.model_dump(mode="json")
        result["injection_file"] = self.injection_file
        result["injection_file_exists"] = self.injection_file_exists
        result["nested_envrc"] = self.nested_envrc
        return result


def get_status(
    current_dir: str | None = None,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    interpreter: Interpreter | None = None,
) -> StatusResult:
    """Collect status without changing anything on disk."""
    result = StatusResult(current_dir=current_dir or os.getcwd())
    result.session = session_id(environ)
    result.state_path = default_state_path(environ)
    result.state = load_state(result.state_path)

    try:
        config = load_config(environ, config_path)
    except ConfigError as e:
        result.error = e.message
        return result

    result.config = config
    result.in_scope = is_within_scope(result.current_dir, config.project_root)
    result.interpreter_version = _interpreter_version(
        interpreter or PythonInterpreter(config.python)
    )

    nested = find_nested_envrc(config.project_root)
    result.nested_envrc = str(nested) if nested else None

    if result.state.injected_directory and config.injection_file_name:
        pth_file = Path(result.state.injected_directory) / config.injection_file_name
        result.injection_file = str(pth_file)
        result.injection_file_exists = pth_file.is_file()

    return result


def _interpreter_version(interpreter: Interpreter) -> str | None:
    query = Query(operation="version", timeout=5)
    if interpreter.check(query):
        return None
    return interpreter.run(query).version
