"""
Scope controller — the injection/cleanup state machine.

Given the current directory, the configuration and the session state,
decide between no-op, inject and cleanup, and carry the decision out:

    1. cleanup  — something was injected and we left the project root
    2. inject   — inside the root, trigger on, nothing injected yet
    3. no-op    — anything else; strictly observational

Cleanup is checked first so that re-entering the root after leaving it
is a fresh injection opportunity instead of being blocked by stale
"done" state.

Service errors never escape ``evaluate``: they are folded into the
EvaluationResult together with the exit code the CLI should use.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum

from pth_manager.core.errors import (
    EXIT_OK,
    ConfigError,
    MissingDirectoryError,
    PthManagerError,
    SafetyAbort,
)
from pth_manager.core.models.config import ScopeConfig
from pth_manager.core.models.state import ActionKind, RuntimeState
from pth_manager.core.persistence.audit import AuditEntry, AuditLog
from pth_manager.core.services.cleanup import cleanup
from pth_manager.core.services.injection import InjectionResult, ensure_injected
from pth_manager.core.services.safety import is_protected
from pth_manager.core.services.scope import is_within_scope, warn_if_nested
from pth_manager.core.services.site_packages import SitePackagesResolver

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Which rule of the state machine fired."""

    NOOP = "noop"
    INJECT = "inject"
    CLEANUP = "cleanup"


@dataclass
class EvaluationResult:
    """Outcome of one ``ScopeController.evaluate`` call."""

    decision: Decision = Decision.NOOP
    current_dir: str = ""
    target_file: str | None = None
    injection: InjectionResult | None = None
    removed: bool = False
    nested_envrc: str | None = None

    error: str | None = None
    error_category: str | None = None
    exit_code: int = EXIT_OK

    @property
    def ok(self) -> bool:
        return self.error is None

    def fail(self, err: PthManagerError) -> None:
        self.error = err.message
        self.error_category = err.category
        self.exit_code = err.exit_code

    def to_dict(self) -> dict:
        return {
            "decision": self.decision.value,
            "current_dir": self.current_dir,
            "target_file": self.target_file,
            "injection": self.injection.value if self.injection else None,
            "removed": self.removed,
            "nested_envrc": self.nested_envrc,
            "ok": self.ok,
            "error": self.error,
            "error_category": self.error_category,
            "exit_code": self.exit_code,
        }


class ScopeController:
    """Drive the resolver, safety guard, writer and cleanup for one session.

    Args:
        resolver: Site-packages resolver. Built from ``config.python``
            on first use when omitted.
        audit: Optional ledger recording every inject/cleanup.
        session: Session id stamped on audit entries.
    """

    def __init__(
        self,
        resolver: SitePackagesResolver | None = None,
        audit: AuditLog | None = None,
        session: str = "",
    ):
        self._resolver = resolver
        self._audit = audit
        self._session = session

    def evaluate(
        self,
        current_dir: str,
        config: ScopeConfig,
        state: RuntimeState,
    ) -> EvaluationResult:
        """Decide and perform the action for ``current_dir``. Mutates ``state``."""
        inside = is_within_scope(current_dir, config.project_root)

        if state.action_done and config.has_scope and not inside:
            logger.debug("Cleanup required: action done and %s is outside %s",
                         current_dir, config.project_root)
            return self._cleanup(current_dir, config, state)

        if inside and config.inject_trigger and not state.action_done:
            logger.debug("Injection required: inside %s, trigger active, action not done",
                         config.project_root)
            return self._inject(current_dir, config, state)

        logger.debug("No action required for current state.")
        return EvaluationResult(decision=Decision.NOOP, current_dir=current_dir)

    # ── Rules ───────────────────────────────────────────────────

    def _cleanup(
        self,
        current_dir: str,
        config: ScopeConfig,
        state: RuntimeState,
    ) -> EvaluationResult:
        result = EvaluationResult(decision=Decision.CLEANUP, current_dir=current_dir)
        undone = state.action_kind
        try:
            if not state.injected_directory:
                logger.warning("Injected directory was missing from state during cleanup.")
            elif not config.injection_file_name:
                logger.warning(
                    "PTH_FILE_NAME is not set; cannot remove the injection file in %s.",
                    state.injected_directory,
                )
            else:
                result.target_file = os.path.join(
                    state.injected_directory, config.injection_file_name
                )
                result.removed = cleanup(state.injected_directory, config.injection_file_name)
        except PthManagerError as e:
            logger.error("%s", e.message)
            result.fail(e)
        finally:
            # zeroed on every cleanup outcome
            state.reset()

        self._record(result, undone)
        return result

    def _inject(
        self,
        current_dir: str,
        config: ScopeConfig,
        state: RuntimeState,
    ) -> EvaluationResult:
        result = EvaluationResult(decision=Decision.INJECT, current_dir=current_dir)
        nested = warn_if_nested(config.project_root)
        result.nested_envrc = str(nested) if nested else None

        try:
            target_dir = self._prepare(config, state)
            result.target_file = os.path.join(target_dir, config.injection_file_name)
            outcome = ensure_injected(
                target_dir, config.injection_file_name, config.dev_library_path
            )
        except SafetyAbort as e:
            logger.warning("%s", e.message)
            result.fail(e)
        except PthManagerError as e:
            logger.error("%s", e.message)
            result.fail(e)
        else:
            result.injection = outcome
            kind = ActionKind.CREATED if outcome is InjectionResult.CREATED else ActionKind.APPENDED
            state.record(kind, target_dir)

        self._record(result, state.action_kind if result.ok else None)
        return result

    def _prepare(self, config: ScopeConfig, state: RuntimeState) -> str:
        """Validate settings and locate the target directory for an injection."""
        missing = config.missing_injection_settings()
        if missing:
            raise ConfigError(
                f"Missing required configuration variables ({' or '.join(missing)}). "
                "Cannot inject path."
            )

        target_dir = self._get_resolver(config).resolve(state)

        if is_protected(target_dir, config.protected_prefixes):
            raise SafetyAbort(
                f"Target path {target_dir} is a system path. Aborting injection for safety."
            )

        logger.debug("Target .pth file location: %s",
                     os.path.join(target_dir, config.injection_file_name))
        logger.debug("Developer library path to inject: %s", config.dev_library_path)

        absent = [p for p in (config.dev_library_path, target_dir) if not os.path.isdir(p)]
        if absent:
            raise MissingDirectoryError(
                f"Required directories not found: {', '.join(absent)}. Cannot inject path."
            )
        return target_dir

    def _get_resolver(self, config: ScopeConfig) -> SitePackagesResolver:
        if self._resolver is None:
            self._resolver = SitePackagesResolver(executable=config.python)
        return self._resolver

    def _record(self, result: EvaluationResult, kind: ActionKind | None = None) -> None:
        if self._audit is None:
            return

        if result.ok:
            status = "ok"
        elif result.error_category == SafetyAbort.category:
            status = "refused"
        else:
            status = "failed"

        if result.injection is not None:
            outcome = result.injection.value
        elif result.decision is Decision.CLEANUP and result.ok:
            outcome = "removed" if result.removed else "absent"
        else:
            outcome = ""

        context: dict[str, str] = {}
        if kind is not None and kind is not ActionKind.NONE:
            context["action_kind"] = kind.value
        if result.nested_envrc:
            context["nested_envrc"] = result.nested_envrc

        self._audit.append(AuditEntry(
            session=self._session,
            decision=result.decision.value,
            status=status,
            current_dir=result.current_dir,
            target_file=result.target_file or "",
            outcome=outcome,
            error=result.error,
            context=context,
        ))
