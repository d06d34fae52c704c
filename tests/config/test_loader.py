"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from lintspan.config.loader import GLOBAL_CONFIG_PATH, _deep_merge, _load_yaml, load_config
from lintspan.config.models import LintSpanConfig
from lintspan.core.errors import ConfigError, ErrorCode


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("annotation:\n  tab_size: 2\n")
        assert _load_yaml(yaml_file) == {"annotation": {"tab_size": 2}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("annotation:\n  tab_size:\n    - invalid: [unclosed")
        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_merge(self) -> None:
        """Nested dicts are merged recursively."""
        base = {"annotation": {"tab_size": 4, "whole_line": True}}
        override = {"annotation": {"tab_size": 2}}
        assert _deep_merge(base, override) == {"annotation": {"tab_size": 2, "whole_line": True}}

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        override: dict[str, Any] = {"a": "simple"}
        assert _deep_merge(base, override) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        with patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)
        assert isinstance(config, LintSpanConfig)
        assert config.logging.level == "WARNING"
        assert config.annotation.tab_size == 4

    def test_loads_repo_config(self, tmp_path: Path) -> None:
        config_dir = tmp_path / ".lintspan"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("annotation:\n  whole_line: true\n")

        with patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)
        assert config.annotation.whole_line is True

    def test_repo_config_overrides_global(self, tmp_path: Path) -> None:
        global_path = tmp_path / "global.yaml"
        global_path.write_text("annotation:\n  tab_size: 8\n  show_column: true\n")
        config_dir = tmp_path / ".lintspan"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("annotation:\n  tab_size: 2\n")

        with patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", global_path):
            config = load_config(tmp_path)
        assert config.annotation.tab_size == 2
        assert config.annotation.show_column is True

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        config_dir = tmp_path / ".lintspan"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("annotation:\n  tab_size: 2\n")

        with (
            patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(os.environ, {"LINTSPAN__ANNOTATION__TAB_SIZE": "8"}),
        ):
            config = load_config(tmp_path)
        assert config.annotation.tab_size == 8

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        with (
            patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(os.environ, {"LINTSPAN__ANNOTATION__TREAT_AS_WARNINGS": "false"}),
        ):
            config = load_config(tmp_path, annotation={"treat_as_warnings": True})
        assert config.annotation.treat_as_warnings is True

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        config_dir = tmp_path / ".lintspan"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("annotation:\n  tab_size: 0\n")

        with (
            patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError) as exc_info,
        ):
            load_config(tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE

    def test_explicit_config_file_replaces_repo_config(self, tmp_path: Path) -> None:
        config_dir = tmp_path / ".lintspan"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("annotation:\n  tab_size: 2\n  whole_line: true\n")
        explicit = tmp_path / "ci.yaml"
        explicit.write_text("annotation:\n  tab_size: 8\n")

        with patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path, config_file=explicit)
        assert config.annotation.tab_size == 8
        assert config.annotation.whole_line is False

    def test_missing_config_file(self, tmp_path: Path) -> None:
        with (
            patch("lintspan.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError) as exc_info,
        ):
            load_config(tmp_path, config_file=tmp_path / "missing.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_in_user_config(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert "lintspan" in str(GLOBAL_CONFIG_PATH)
