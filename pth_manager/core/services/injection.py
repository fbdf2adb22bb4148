"""
Injection file writer — idempotent create-or-append of one .pth line.

The injection file is a plain text file consumed by ``site`` at
interpreter startup; each line is a directory added to ``sys.path``.
Lines written by other tools are preserved.

Writes are atomic (write to temp file, then rename), so on any failure
the file is either untouched or fully reflects the single operation.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from enum import Enum
from pathlib import Path

from pth_manager.core.errors import InjectionWriteError

logger = logging.getLogger(__name__)

_NEW_FILE_MODE = 0o644


class InjectionResult(str, Enum):
    """Outcome of ``ensure_injected``."""

    CREATED = "created"
    APPENDED = "appended"
    ALREADY_PRESENT = "already_present"


def contains_line(path: Path, payload_line: str) -> bool:
    """Whether ``payload_line`` appears in ``path`` as an exact line.

    Compared as bytes, so lines other tools wrote in any encoding are fine.
    """
    payload = os.fsencode(payload_line)
    with path.open("rb") as f:
        return any(line.rstrip(b"\r\n") == payload for line in f)


def ensure_injected(target_dir: str, file_name: str, payload_line: str) -> InjectionResult:
    """Make sure ``target_dir/file_name`` contains ``payload_line``.

    Args:
        target_dir: Directory holding the injection file (site-packages).
        file_name: Base name of the injection file.
        payload_line: The path to inject, written as one line.

    Returns:
        CREATED, APPENDED or ALREADY_PRESENT.

    Raises:
        InjectionWriteError: The file could not be read, created or appended.
    """
    pth_file = Path(target_dir) / file_name
    payload = os.fsencode(payload_line) + b"\n"

    if not pth_file.is_file():
        _atomic_write(pth_file, payload, template=None)
        logger.info("Created new PTH file %s and injected path", pth_file)
        return InjectionResult.CREATED

    try:
        if contains_line(pth_file, payload_line):
            logger.debug("Path already exists in %s. Skipping injection.", pth_file)
            return InjectionResult.ALREADY_PRESENT
        existing = pth_file.read_bytes()
    except OSError as e:
        raise InjectionWriteError(
            f"Cannot read {pth_file}: {e}", path=str(pth_file)
        ) from e

    if existing and not existing.endswith(b"\n"):
        existing += b"\n"
    _atomic_write(pth_file, existing + payload, template=pth_file)
    logger.info("Appended path to existing PTH file %s", pth_file)
    return InjectionResult.APPENDED


def _atomic_write(path: Path, content: bytes, template: Path | None) -> None:
    """Replace ``path`` with ``content`` via temp-file-then-rename.

    ``template`` is the file whose permission bits the result keeps.
    """
    action = "appending to" if template else "creating"
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".pth_",
            suffix=".tmp",
        )
    except OSError as e:
        raise InjectionWriteError(
            f"Permission denied {action} {path}. Check Venv permissions. ({e})",
            path=str(path),
        ) from e

    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        if template is not None:
            shutil.copymode(template, tmp)
        else:
            tmp.chmod(_NEW_FILE_MODE)
        tmp.replace(path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise InjectionWriteError(
            f"Failed {action} {path}: {e}", path=str(path)
        ) from e
