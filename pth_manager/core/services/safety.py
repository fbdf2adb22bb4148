"""
Safety guard — refuse to write into interpreter-owned directories.
"""

from __future__ import annotations

from collections.abc import Iterable

# Install roots owned by the base Python installation, not a venv.
PROTECTED_PREFIXES: tuple[str, ...] = (
    "/usr/lib/python",
    "/usr/local/lib/python",
    "/usr/lib64/python",
    "/usr/local/lib64/python",
    "/usr/share/python",
    "/Library/Frameworks/Python.framework",
    "/System/Library/Frameworks/Python.framework",
)


def is_protected(path: str, extra_prefixes: Iterable[str] = ()) -> bool:
    """Whether ``path`` lies under a protected system prefix."""
    for prefix in (*PROTECTED_PREFIXES, *extra_prefixes):
        if prefix and path.startswith(prefix):
            return True
    return False
