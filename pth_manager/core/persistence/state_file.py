"""
State file persistence — atomic read/write of the session RuntimeState.

Each interactive shell session gets its own JSON record under
``<state_dir>/sessions/<session>.json``. Writes are atomic (write to
temp file, then rename). A zero state is not stored: saving it removes
the record.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from pth_manager.core.models.state import RuntimeState

logger = logging.getLogger(__name__)

ENV_STATE_DIR = "PTH_MANAGER_STATE_DIR"
ENV_SESSION = "PTH_MANAGER_SESSION"

SESSIONS_DIR = "sessions"


def default_state_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Directory holding session records and the audit ledger."""
    env = os.environ if environ is None else environ
    if env.get(ENV_STATE_DIR):
        return Path(env[ENV_STATE_DIR])
    base = env.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(base) / "pth_manager"


def session_id(environ: Mapping[str, str] | None = None) -> str:
    """Identify the shell session: ``$PTH_MANAGER_SESSION`` or the parent pid."""
    env = os.environ if environ is None else environ
    return env.get(ENV_SESSION) or str(os.getppid())


def default_state_path(environ: Mapping[str, str] | None = None) -> Path:
    """Path of the current session's state record."""
    return default_state_dir(environ) / SESSIONS_DIR / f"{session_id(environ)}.json"


def load_state(path: Path) -> RuntimeState:
    """Read the session record; a missing or unusable one means the zero state."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return RuntimeState()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read session state %s (%s); treating as empty", path, e)
        return RuntimeState()

    try:
        return RuntimeState.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(
            "Discarding unusable session state %s (%d error(s)); treating as empty",
            path,
            e.error_count(),
        )
        return RuntimeState()


def save_state(state: RuntimeState, path: Path) -> None:
    """Persist ``state`` atomically; a zero state deletes the record instead.

    Raises:
        OSError: The record could not be written (already logged).
    """
    if state.is_zero:
        clear_state(path)
        return

    content = state.model_dump_json(indent=2) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".state_", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        try:
            os.replace(tmp_name, path)
        except OSError:
            os.unlink(tmp_name)
            raise
    except OSError as e:
        logger.error("Failed to save session state to %s: %s", path, e)
        raise
    logger.debug("Session state saved to %s", path)


def clear_state(path: Path) -> bool:
    """Remove a session record. Returns True if one existed."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("State cleared at %s", path)
    return True
