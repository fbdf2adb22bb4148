"""
Probe models — questions put to an interpreter and its answers.

A ``Query`` names what to ask (its version, or its package directories).
A ``ProbeResult`` carries the answer. Interpreter adapters hand failures
back inside the result instead of raising.
"""

from __future__ import annotations

import time
from typing import Literal

from pydantic import BaseModel, Field

Operation = Literal["version", "site_packages"]


class Query(BaseModel):
    """One question for an interpreter."""

    operation: Operation
    timeout: float = 30
    cwd: str | None = None


class ProbeResult(BaseModel):
    """What the interpreter said, or why it could not say it."""

    interpreter: str
    operation: str
    status: Literal["ok", "failed"] = "ok"

    paths: list[str] = Field(default_factory=list)
    version: str | None = None

    error: str | None = None
    returncode: int | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def refused(cls, interpreter: str, operation: str, error: str, **fields) -> ProbeResult:
        """A failed probe with an explanation."""
        return cls(
            interpreter=interpreter,
            operation=operation,
            status="failed",
            error=error,
            **fields,
        )


class Stopwatch:
    """Milliseconds elapsed since construction."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    @property
    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self._start) * 1000)
