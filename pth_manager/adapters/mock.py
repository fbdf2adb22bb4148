"""
Fake interpreter for tests.

Answers every query from canned values and records what it was asked.
"""

from __future__ import annotations

from pth_manager.adapters.base import Interpreter
from pth_manager.core.models.probe import ProbeResult, Query


class FakeInterpreter(Interpreter):
    """In-memory stand-in for a virtual environment's Python."""

    def __init__(
        self,
        paths: list[str] | None = None,
        version: str = "3.12.0",
        available: bool = True,
        executable: str = "fake-python",
    ):
        self._executable = executable
        self.paths = list(paths or [])
        self.version = version
        self.available = available
        self.queries: list[Query] = []
        self._errors: dict[str, str] = {}

    @property
    def executable(self) -> str:
        return self._executable

    @property
    def call_count(self) -> int:
        return len(self.queries)

    def is_available(self) -> bool:
        return self.available

    def fail_with(self, operation: str, error: str = "Fake failure") -> None:
        """Make every later ``operation`` query fail with ``error``."""
        self._errors[operation] = error

    def run(self, query: Query) -> ProbeResult:
        self.queries.append(query)

        if query.operation in self._errors:
            return ProbeResult.refused(
                self._executable, query.operation, self._errors[query.operation], returncode=1
            )
        if query.operation == "version":
            return ProbeResult(
                interpreter=self._executable, operation="version", version=self.version
            )
        return ProbeResult(
            interpreter=self._executable, operation=query.operation, paths=list(self.paths)
        )
