"""
Interpreter adapter contract.

The core reaches the virtual environment's Python only through this
interface, so the resolver can be driven by ``FakeInterpreter`` in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pth_manager.core.models.probe import ProbeResult, Query


class Interpreter(ABC):
    """A Python interpreter that can be probed.

    ``run`` never raises: every failure comes back as a failed
    ProbeResult.
    """

    @property
    @abstractmethod
    def executable(self) -> str:
        """Command or path used to start the interpreter."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the executable can be found. Fast, never raises."""

    @abstractmethod
    def run(self, query: Query) -> ProbeResult:
        """Answer ``query``."""

    def check(self, query: Query) -> str | None:
        """Reason ``query`` cannot run, or None when it can."""
        if not self.is_available():
            return f"'{self.executable}' executable not found in PATH. Is the Venv active?"
        return None

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} executable={self.executable!r}>"
