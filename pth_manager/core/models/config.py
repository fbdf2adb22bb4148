"""
ScopeConfig — the externally supplied settings for one evaluation.

Read-only to the core. Loaded fresh on every invocation from the
environment (and optionally a YAML file) by core.config.loader.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ScopeConfig(BaseModel):
    """Configuration for the directory-scoped injection.

    ``project_root`` is the contract anchor: without it, or without
    ``inject_trigger``, nothing is injected. ``dev_library_path`` and
    ``injection_file_name`` are only required once an injection is
    actually attempted.
    """

    project_root: str = ""
    inject_trigger: bool = False
    dev_library_path: str = ""
    injection_file_name: str = ""
    debug_enabled: bool = False

    # ── Collaborators ────────────────────────────────────────────
    python: str = "python"
    protected_prefixes: list[str] = Field(default_factory=list)

    @property
    def has_scope(self) -> bool:
        """Whether a project root is configured at all."""
        return bool(self.project_root)

    def missing_injection_settings(self) -> list[str]:
        """Names of the settings an injection needs but doesn't have."""
        missing = []
        if not self.dev_library_path:
            missing.append("DEV_SITE_PACKAGES_DIR")
        if not self.injection_file_name:
            missing.append("PTH_FILE_NAME")
        return missing
