"""
Audit ledger — what pth-manager did to site-packages, and when.

Each inject or cleanup decision appends one JSON line to
``<state dir>/audit.ndjson``. Lines are never rewritten; ``pthm history``
reads the tail.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

AUDIT_FILE_NAME = "audit.ndjson"


class AuditEntry(BaseModel):
    """One controller decision that touched (or tried to touch) a .pth file."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    session: str = ""
    decision: Literal["inject", "cleanup", ""] = ""
    status: Literal["ok", "refused", "failed", ""] = ""

    current_dir: str = ""
    target_file: str = ""
    outcome: str = ""              # created, appended, already_present, removed, absent
    error: str | None = None

    context: dict[str, Any] = Field(default_factory=dict)


class AuditLog:
    """NDJSON ledger. Appends are best-effort; a broken ledger never blocks a cd."""

    def __init__(self, path: Path | None = None, state_dir: Path | None = None):
        self._path = path or (state_dir or Path.cwd()) / AUDIT_FILE_NAME

    @property
    def path(self) -> Path:
        return self._path

    def append(self, entry: AuditEntry) -> bool:
        """Add ``entry``; returns False (after logging) if the file is unwritable."""
        line = entry.model_dump_json() + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            logger.error("Could not append to audit ledger %s: %s", self._path, e)
            return False
        return True

    def entries(self) -> Iterator[AuditEntry]:
        """Yield entries oldest first, skipping lines that do not parse."""
        try:
            f = self._path.open("rb")
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error("Could not read audit ledger %s: %s", self._path, e)
            return

        with f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    entry = AuditEntry.model_validate(json.loads(line.decode("utf-8")))
                except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
                    logger.warning("%s:%d: skipping corrupt entry (%s)", self._path, lineno, e)
                    continue
                yield entry

    def tail(self, n: int = 20) -> list[AuditEntry]:
        """The last ``n`` entries, oldest first."""
        if n <= 0:
            return []
        return list(deque(self.entries(), maxlen=n))
