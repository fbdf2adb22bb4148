"""
RuntimeState — what the manager has done in this shell session.

The state is an explicit object: the controller receives it, mutates
it, and the caller decides whether to persist it (see
core.persistence.state_file). ``reset()`` restores the zero value.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator


class ActionKind(str, Enum):
    """How the injection file was last touched."""

    NONE = "NONE"
    CREATED = "CREATED"
    APPENDED = "APPENDED"


class RuntimeState(BaseModel):
    """Session-scoped record of the active injection.

    Invariant: ``action_done`` implies ``injected_directory`` is set.
    """

    action_done: bool = False
    action_kind: ActionKind = ActionKind.NONE
    injected_directory: str = ""
    resolved_packages_cache: str = ""

    @model_validator(mode="after")
    def _done_needs_directory(self) -> RuntimeState:
        if self.action_done and not self.injected_directory:
            raise ValueError("action_done requires injected_directory")
        return self

    @property
    def is_zero(self) -> bool:
        """Whether this state equals the freshly-reset value."""
        return self == RuntimeState()

    def record(self, kind: ActionKind, directory: str) -> None:
        """Record a successful injection into ``directory``."""
        self.action_done = True
        self.action_kind = kind
        self.injected_directory = directory

    def reset(self) -> None:
        """Restore the zero value, including the resolver cache."""
        self.action_done = False
        self.action_kind = ActionKind.NONE
        self.injected_directory = ""
        self.resolved_packages_cache = ""
