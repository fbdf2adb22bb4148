"""
Run use case — one full evaluate/act cycle for the current session.

Loads configuration and session state, runs the ScopeController (either
directly or through the directory-change hook), and saves the state
back. Used by ``pthm run`` and ``pthm hook``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from pth_manager.core.config.loader import load_config
from pth_manager.core.engine.controller import EvaluationResult, ScopeController
from pth_manager.core.engine.hook import DirectoryChangeHook
from pth_manager.core.errors import EXIT_CRITICAL, EXIT_OK, ConfigError
from pth_manager.core.models.state import RuntimeState
from pth_manager.core.persistence.audit import AuditLog
from pth_manager.core.persistence.state_file import (
    clear_state,
    default_state_dir,
    default_state_path,
    load_state,
    save_state,
    session_id,
)
from pth_manager.core.services.site_packages import SitePackagesResolver

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of one evaluation cycle."""

    evaluation: EvaluationResult | None = None
    state: RuntimeState | None = None
    state_path: Path | None = None
    error: str | None = None
    exit_code: int = EXIT_OK

    def to_dict(self) -> dict:
        result: dict = {"exit_code": self.exit_code}
        if self.error:
            result["error"] = self.error
        if self.evaluation is not None:
            result["evaluation"] = self.evaluation.to_dict()
        if self.state is not None:
            result["state"] = self.state.model_dump(mode="json")
        if self.state_path is not None:
            result["state_path"] = str(self.state_path)
        return result


def run_manage(
    current_dir: str | None = None,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    resolver: SitePackagesResolver | None = None,
) -> RunResult:
    """Evaluate the current directory once (manual trigger).

    Args:
        current_dir: Directory to evaluate (default: cwd).
        config_path: Optional YAML config file.
        environ: Environment mapping (default: ``os.environ``).
        resolver: Override the site-packages resolver (tests).
    """
    return _cycle(
        current_dir or os.getcwd(),
        config_path,
        environ,
        resolver,
        cd_status=None,
    )


def run_hook(
    new_dir: str,
    cd_status: int,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    resolver: SitePackagesResolver | None = None,
) -> RunResult:
    """Handle a directory change reported by the shell.

    A failed ``cd`` is returned unchanged without loading anything.
    """
    if cd_status != 0:
        logger.debug("Builtin cd failed with status %d. Aborting manager logic.", cd_status)
        return RunResult(exit_code=cd_status)
    return _cycle(new_dir, config_path, environ, resolver, cd_status=cd_status)


def reset_session(environ: Mapping[str, str] | None = None) -> tuple[Path, bool]:
    """Forget this session's state (and resolver cache). The .pth file is kept.

    Returns:
        (state_path, existed)
    """
    path = default_state_path(environ)
    return path, clear_state(path)


def _cycle(
    current_dir: str,
    config_path: Path | None,
    environ: Mapping[str, str] | None,
    resolver: SitePackagesResolver | None,
    cd_status: int | None,
) -> RunResult:
    result = RunResult()

    try:
        config = load_config(environ, config_path)
    except ConfigError as e:
        result.error = e.message
        result.exit_code = e.exit_code
        return result

    state_path = default_state_path(environ)
    state = load_state(state_path)
    result.state_path = state_path

    controller = ScopeController(
        resolver=resolver,
        audit=AuditLog(state_dir=default_state_dir(environ)),
        session=session_id(environ),
    )

    if cd_status is None:
        evaluation = controller.evaluate(current_dir, config, state)
        result.exit_code = evaluation.exit_code
    else:
        hook = DirectoryChangeHook(controller)
        result.exit_code, evaluation = hook.on_directory_change(
            current_dir, cd_status, config, state
        )

    result.evaluation = evaluation
    result.state = state

    try:
        save_state(state, state_path)
    except OSError as e:
        result.error = f"Cannot save session state to {state_path}: {e}"
        result.exit_code = EXIT_CRITICAL

    return result
