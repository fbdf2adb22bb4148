"""
Domain models — Pydantic types for the pth manager.

    from pth_manager.core.models import ScopeConfig, RuntimeState, ActionKind
"""

from pth_manager.core.models.config import ScopeConfig
from pth_manager.core.models.probe import ProbeResult, Query
from pth_manager.core.models.state import ActionKind, RuntimeState

__all__ = [
    # config.py
    "ScopeConfig",
    # probe.py
    "ProbeResult",
    "Query",
    # state.py
    "ActionKind",
    "RuntimeState",
]
