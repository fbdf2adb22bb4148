"""
Tests for configuration loading — environment variables and YAML file.
"""

import textwrap
from pathlib import Path

import pytest

from pth_manager.core.config.loader import ConfigError, is_flag_set, load_config


class TestFlags:
    @pytest.mark.parametrize("value", ["1", "true", 1, True])
    def test_enabled(self, value):
        assert is_flag_set(value)

    @pytest.mark.parametrize("value", ["0", "false", "TRUE", "yes", "", None, False])
    def test_disabled(self, value):
        assert not is_flag_set(value)


class TestLoadFromEnvironment:
    def test_full_environment(self):
        config = load_config({
            "PTH_MANAGER_ROOT": "/home/u/app",
            "SHOULD_INJECT_PTH_FILE": "1",
            "DEV_SITE_PACKAGES_DIR": "/home/u/app/libs",
            "PTH_FILE_NAME": "dev.pth",
            "DEBUG": "true",
        })
        assert config.project_root == "/home/u/app"
        assert config.inject_trigger is True
        assert config.dev_library_path == "/home/u/app/libs"
        assert config.injection_file_name == "dev.pth"
        assert config.debug_enabled is True
        assert config.python == "python"

    def test_empty_environment(self):
        config = load_config({})
        assert config.project_root == ""
        assert config.inject_trigger is False
        assert config.missing_injection_settings() == ["DEV_SITE_PACKAGES_DIR", "PTH_FILE_NAME"]

    def test_trigger_other_values_disable(self):
        config = load_config({"SHOULD_INJECT_PTH_FILE": "yes"})
        assert config.inject_trigger is False

    def test_paths_are_normalised(self):
        config = load_config({
            "PTH_MANAGER_ROOT": " /home/u/app/ ",
            "DEV_SITE_PACKAGES_DIR": "/home/u/app//libs/",
        })
        assert config.project_root == "/home/u/app"
        assert config.dev_library_path == "/home/u/app/libs"

    def test_file_name_must_be_bare(self):
        with pytest.raises(ConfigError, match="bare file name"):
            load_config({"PTH_FILE_NAME": "sub/dev.pth"})

    def test_interpreter_and_prefixes(self):
        config = load_config({
            "PTH_MANAGER_PYTHON": "/opt/venv/bin/python",
            "PTH_MANAGER_PROTECTED_PREFIXES": "/opt/conda:/nix/store",
        })
        assert config.python == "/opt/venv/bin/python"
        assert config.protected_prefixes == ["/opt/conda", "/nix/store"]


class TestLoadFromFile:
    def _write(self, tmp_path: Path, content: str) -> Path:
        path = tmp_path / "pth_manager.yml"
        path.write_text(textwrap.dedent(content))
        return path

    def test_file_values(self, tmp_path: Path):
        path = self._write(tmp_path, """\
            project_root: /home/u/app
            inject_trigger: true
            dev_library_path: /home/u/app/libs
            injection_file_name: dev.pth
            protected_prefixes:
              - /opt/conda
        """)
        config = load_config({}, path)
        assert config.project_root == "/home/u/app"
        assert config.inject_trigger is True
        assert config.protected_prefixes == ["/opt/conda"]

    def test_environment_overrides_file(self, tmp_path: Path):
        path = self._write(tmp_path, """\
            project_root: /home/u/app
            injection_file_name: file.pth
        """)
        config = load_config({"PTH_FILE_NAME": "env.pth"}, path)
        assert config.injection_file_name == "env.pth"
        assert config.project_root == "/home/u/app"

    def test_file_from_environment_variable(self, tmp_path: Path):
        path = self._write(tmp_path, "project_root: /srv/app\n")
        config = load_config({"PTH_MANAGER_CONFIG": str(path)})
        assert config.project_root == "/srv/app"

    def test_prefixes_merge(self, tmp_path: Path):
        path = self._write(tmp_path, "protected_prefixes: [/opt/conda]\n")
        config = load_config({"PTH_MANAGER_PROTECTED_PREFIXES": "/nix/store"}, path)
        assert config.protected_prefixes == ["/opt/conda", "/nix/store"]

    def test_empty_file(self, tmp_path: Path):
        path = self._write(tmp_path, "")
        assert load_config({}, path).project_root == ""

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config({}, tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = self._write(tmp_path, "project_root: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config({}, path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = self._write(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config({}, path)

    def test_unknown_keys_ignored(self, tmp_path: Path):
        path = self._write(tmp_path, "project_root: /srv/app\ncolour: blue\n")
        assert load_config({}, path).project_root == "/srv/app"
