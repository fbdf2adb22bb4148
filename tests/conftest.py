"""
Shared test fixtures and configuration.
"""

import json
import stat
from pathlib import Path

import pytest

from pth_manager.adapters.mock import FakeInterpreter
from pth_manager.core.models.config import ScopeConfig
from pth_manager.core.services.site_packages import SitePackagesResolver


def make_resolver(*paths: str) -> tuple[SitePackagesResolver, FakeInterpreter]:
    """A resolver whose interpreter reports ``paths``."""
    fake = FakeInterpreter(paths=list(paths))
    return SitePackagesResolver(interpreter=fake), fake


@pytest.fixture
def resolver_for():
    """Factory fixture: build a fake-backed resolver for given paths."""
    return make_resolver


@pytest.fixture
def layout(tmp_path: Path) -> dict[str, Path]:
    """Project root with src/ and libs/, plus a venv site-packages dir."""
    root = tmp_path / "home" / "u" / "app"
    (root / "src").mkdir(parents=True)
    (root / "libs").mkdir()
    site_packages = tmp_path / "env" / "site-packages"
    site_packages.mkdir(parents=True)
    outside = tmp_path / "elsewhere"
    outside.mkdir()
    return {
        "root": root,
        "src": root / "src",
        "libs": root / "libs",
        "site_packages": site_packages,
        "outside": outside,
    }


@pytest.fixture
def config(layout: dict[str, Path]) -> ScopeConfig:
    return ScopeConfig(
        project_root=str(layout["root"]),
        inject_trigger=True,
        dev_library_path=str(layout["libs"]),
        injection_file_name="dev.pth",
    )


@pytest.fixture
def fake_python(tmp_path: Path, layout: dict[str, Path]) -> Path:
    """Executable that prints a site-packages list like the real interpreter."""
    script = tmp_path / "bin" / "fake-python"
    script.parent.mkdir()
    payload = json.dumps([str(layout["site_packages"])])
    script.write_text(f"#!/bin/sh\necho '{payload}'\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def environ(tmp_path: Path, layout: dict[str, Path], fake_python: Path) -> dict[str, str]:
    """A complete, injection-ready environment for one test session."""
    return {
        "PTH_MANAGER_ROOT": str(layout["root"]),
        "SHOULD_INJECT_PTH_FILE": "1",
        "DEV_SITE_PACKAGES_DIR": str(layout["libs"]),
        "PTH_FILE_NAME": "dev.pth",
        "PTH_MANAGER_PYTHON": str(fake_python),
        "PTH_MANAGER_STATE_DIR": str(tmp_path / "state"),
        "PTH_MANAGER_SESSION": "test-session",
    }
