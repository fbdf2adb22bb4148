"""
Tests for the status use case — read-only snapshot of config and state.
"""

import sys

from pth_manager.adapters.mock import FakeInterpreter
from pth_manager.core.use_cases.status import get_status


class TestGetStatus:
    def test_reports_interpreter_version(self, environ, layout):
        fake = FakeInterpreter(version="3.11.9")
        result = get_status(str(layout["src"]), environ=environ, interpreter=fake)

        assert result.interpreter_version == "3.11.9"
        assert [q.operation for q in fake.queries] == ["version"]
        assert result.in_scope is True

    def test_unavailable_interpreter_has_no_version(self, environ, layout):
        fake = FakeInterpreter(available=False)
        result = get_status(str(layout["src"]), environ=environ, interpreter=fake)

        assert result.interpreter_version is None
        assert fake.call_count == 0

    def test_failed_version_query(self, environ, layout):
        fake = FakeInterpreter()
        fake.fail_with("version", "broken venv")
        result = get_status(str(layout["src"]), environ=environ, interpreter=fake)

        assert result.interpreter_version is None

    def test_real_interpreter_from_config(self, environ, layout):
        env = {**environ, "PTH_MANAGER_PYTHON": sys.executable}
        result = get_status(str(layout["outside"]), environ=env)

        assert result.interpreter_version == "%d.%d.%d" % sys.version_info[:3]
        assert result.to_dict()["interpreter_version"] == result.interpreter_version
        assert result.in_scope is False

    def test_status_does_not_touch_site_packages(self, environ, layout):
        get_status(str(layout["src"]), environ=environ, interpreter=FakeInterpreter())
        assert list(layout["site_packages"].iterdir()) == []
