"""
Project scope checks — is a directory inside the configured root?
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

NESTED_MARKER = ".envrc"
_SKIP_DIRS = frozenset({
    ".git", "node_modules", "__pycache__",
    ".venv", "venv", ".tox", ".nox",
})


def is_within_scope(current_dir: str, project_root: str) -> bool:
    """Whether ``current_dir`` is ``project_root`` or one of its descendants.

    Both sides are normalised and compared with a trailing separator,
    so ``/a/proj2`` is not inside ``/a/proj``.
    """
    if not project_root or not current_dir:
        return False
    root = os.path.normpath(project_root).rstrip(os.sep) + os.sep
    current = os.path.normpath(current_dir).rstrip(os.sep) + os.sep
    return current.startswith(root)


def find_nested_envrc(project_root: str) -> Path | None:
    """Return the first ``.envrc`` below the root's own level, if any.

    Nested projects are unsupported; callers warn when one is found.
    """
    if not project_root:
        return None
    root = Path(project_root)
    if not root.is_dir():
        return None

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        if Path(dirpath) != root and NESTED_MARKER in filenames:
            return Path(dirpath) / NESTED_MARKER
    return None


def warn_if_nested(project_root: str) -> Path | None:
    """Log a loud warning when a nested ``.envrc`` exists under the root."""
    nested = find_nested_envrc(project_root)
    if nested is not None:
        logger.warning("!" * 72)
        logger.warning("NESTED .envrc FILE DETECTED: %s", nested)
        logger.warning("Nested projects are not supported; state management may fail.")
        logger.warning("!" * 72)
    return nested
