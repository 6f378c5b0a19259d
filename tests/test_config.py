"""Tests for termedit.config."""

from __future__ import annotations

import json
import logging

import pytest

from termedit.config import EditorConfig, get_config_dir, load_config
from termedit.errors import ConfigError


class TestDefaults:
    def test_default_values(self) -> None:
        config = EditorConfig()
        assert config.tab_stop == 8
        assert config.status_message_timeout == 5.0
        assert config.read_timeout_ds == 1
        assert config.log_file is None

    def test_welcome_banner(self) -> None:
        assert EditorConfig().welcome == "termEdit editor -- version 0.0.1"

    def test_validate_rejects_zero_tab_stop(self) -> None:
        with pytest.raises(ConfigError):
            EditorConfig(tab_stop=0).validate()

    def test_validate_rejects_out_of_range_timeout(self) -> None:
        with pytest.raises(ConfigError):
            EditorConfig(read_timeout_ds=300).validate()
        with pytest.raises(ConfigError):
            EditorConfig(read_timeout_ds=0).validate()

    def test_validate_accepts_timeout_bounds(self) -> None:
        assert EditorConfig(read_timeout_ds=1).validate().read_timeout_ds == 1
        assert EditorConfig(read_timeout_ds=255).validate().read_timeout_ds == 255


class TestLoadConfig:
    def test_no_file_no_env_gives_defaults(self, tmp_path) -> None:
        config = load_config({"TERMEDIT_CONFIG_DIR": str(tmp_path)})
        assert config == EditorConfig()

    def test_config_dir_from_env(self, tmp_path) -> None:
        assert get_config_dir({"TERMEDIT_CONFIG_DIR": str(tmp_path)}) == tmp_path

    def test_reads_json_file(self, tmp_path) -> None:
        (tmp_path / "config.json").write_text(
            json.dumps(
                {
                    "tabStop": 4,
                    "statusMessageTimeout": 2.5,
                    "readTimeout": 2,
                    "logFile": "/tmp/termedit.log",
                }
            )
        )
        config = load_config({"TERMEDIT_CONFIG_DIR": str(tmp_path)})
        assert config.tab_stop == 4
        assert config.status_message_timeout == 2.5
        assert config.read_timeout_ds == 2
        assert config.log_file == "/tmp/termedit.log"

    def test_env_overrides_file(self, tmp_path) -> None:
        (tmp_path / "config.json").write_text(json.dumps({"tabStop": 4}))
        config = load_config(
            {
                "TERMEDIT_CONFIG_DIR": str(tmp_path),
                "TERMEDIT_TAB_STOP": "2",
                "TERMEDIT_LOG": "edit.log",
            }
        )
        assert config.tab_stop == 2
        assert config.log_file == "edit.log"

    def test_malformed_file_is_ignored(self, tmp_path, caplog) -> None:
        caplog.set_level(logging.WARNING, logger="termedit.config")
        (tmp_path / "config.json").write_text("{not json")
        config = load_config({"TERMEDIT_CONFIG_DIR": str(tmp_path)})
        assert config == EditorConfig()
        assert "Ignoring unreadable config" in caplog.text

    def test_non_object_file_is_ignored(self, tmp_path) -> None:
        (tmp_path / "config.json").write_text("[1, 2]")
        assert load_config({"TERMEDIT_CONFIG_DIR": str(tmp_path)}) == EditorConfig()

    def test_bad_env_value_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigError):
            load_config({"TERMEDIT_CONFIG_DIR": str(tmp_path), "TERMEDIT_TAB_STOP": "wide"})

    def test_bad_file_value_raises(self, tmp_path) -> None:
        (tmp_path / "config.json").write_text(json.dumps({"tabStop": 0}))
        with pytest.raises(ConfigError):
            load_config({"TERMEDIT_CONFIG_DIR": str(tmp_path)})

    def test_zero_read_timeout_in_file_raises(self, tmp_path) -> None:
        (tmp_path / "config.json").write_text(json.dumps({"readTimeout": 0}))
        with pytest.raises(ConfigError, match="1..255"):
            load_config({"TERMEDIT_CONFIG_DIR": str(tmp_path)})
