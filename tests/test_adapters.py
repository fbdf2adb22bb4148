"""
Tests for the interpreter adapters — fake and real subprocess-backed.
"""

import stat
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from pth_manager.adapters import FakeInterpreter, PythonInterpreter
from pth_manager.core.models.probe import Query

SITE = Query(operation="site_packages")
VERSION = Query(operation="version")


def _script(tmp_path: Path, body: str) -> Path:
    script = tmp_path / "py"
    script.write_text(f"#!/bin/sh\n{body}\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return script


# ── Fake Interpreter Tests ───────────────────────────────────────────


class TestFakeInterpreter:
    def test_reports_paths(self):
        fake = FakeInterpreter(paths=["/env/a", "/env/b"])
        result = fake.run(SITE)
        assert result.ok
        assert result.paths == ["/env/a", "/env/b"]
        assert fake.call_count == 1

    def test_version(self):
        assert FakeInterpreter(version="3.11.9").run(VERSION).version == "3.11.9"

    def test_fail_with(self):
        fake = FakeInterpreter(paths=["/env/a"])
        fake.fail_with("site_packages", error="Intentional failure")
        result = fake.run(SITE)
        assert result.failed
        assert result.error == "Intentional failure"
        assert fake.run(VERSION).ok

    def test_unavailable_is_reported_by_check(self):
        fake = FakeInterpreter(available=False)
        assert "not found in PATH" in fake.check(SITE)
        assert FakeInterpreter().check(SITE) is None

    def test_repr(self):
        assert "fake-python" in repr(FakeInterpreter())


# ── Python Interpreter Tests ─────────────────────────────────────────


class TestPythonInterpreter:
    def test_default_executable(self):
        assert PythonInterpreter().executable == "python"

    def test_unknown_operation_rejected_by_model(self):
        with pytest.raises(ValidationError):
            Query(operation="install")

    def test_check_missing_executable(self):
        assert "Is the Venv active?" in PythonInterpreter("no-such-python-xyz").check(SITE)

    def test_site_packages_from_real_interpreter(self):
        result = PythonInterpreter(sys.executable).run(SITE)
        assert result.ok
        assert isinstance(result.paths, list)
        assert result.returncode == 0

    def test_version(self):
        result = PythonInterpreter(sys.executable).run(VERSION)
        assert result.ok
        assert result.version == "%d.%d.%d" % sys.version_info[:3]

    def test_nonzero_exit(self, tmp_path: Path):
        script = _script(tmp_path, "echo 'broken venv' >&2; exit 3")
        result = PythonInterpreter(str(script)).run(SITE)
        assert result.failed
        assert result.returncode == 3
        assert "broken venv" in result.error

    def test_unparsable_output(self, tmp_path: Path):
        script = _script(tmp_path, "echo not-json")
        result = PythonInterpreter(str(script)).run(SITE)
        assert result.failed
        assert "Unparsable" in result.error

    def test_wrong_shape_output(self, tmp_path: Path):
        script = _script(tmp_path, "echo '{\"a\": 1}'")
        result = PythonInterpreter(str(script)).run(SITE)
        assert result.failed
        assert "Expected a list of paths" in result.error

    def test_timeout(self, tmp_path: Path):
        script = _script(tmp_path, "exec sleep 5")
        result = PythonInterpreter(str(script)).run(
            Query(operation="site_packages", timeout=0.2)
        )
        assert result.failed
        assert "timed out" in result.error

    def test_missing_executable_never_raises(self):
        result = PythonInterpreter("no-such-python-xyz").run(SITE)
        assert result.failed
        assert "not found" in result.error
