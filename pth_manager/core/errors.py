"""
Error taxonomy — every failure the scope controller can report.

Each error carries the process exit code the CLI should use. Services
raise these; the controller catches them and folds them into an
EvaluationResult so nothing propagates past a single evaluation.
"""

from __future__ import annotations

# ── Exit codes ──────────────────────────────────────────────────

EXIT_OK = 0
EXIT_CRITICAL = 1
# 2 is left to click for usage errors


class PthManagerError(Exception):
    """Base class for all pth-manager failures."""

    category = "error"

    def __init__(self, message: str, exit_code: int = EXIT_CRITICAL):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ConfigError(PthManagerError):
    """Required configuration is missing or malformed."""

    category = "config"


class ResolutionError(PthManagerError):
    """The interpreter could not provide a usable site-packages path."""

    category = "resolution"


class SafetyAbort(PthManagerError):
    """The resolved target is a protected system path. Deliberate refusal."""

    category = "safety"


class MissingDirectoryError(PthManagerError):
    """The library directory or the site-packages directory is absent."""

    category = "missing_directory"


class FilesystemError(PthManagerError):
    """A create, append or delete on the injection file failed."""

    category = "filesystem"

    def __init__(self, message: str, path: str, exit_code: int = EXIT_CRITICAL):
        super().__init__(message, exit_code=exit_code)
        self.path = path


class InjectionWriteError(FilesystemError):
    """Creating or appending to the injection file failed."""


class CleanupError(FilesystemError):
    """Removing the injection file failed."""
