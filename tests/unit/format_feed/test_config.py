"""Tests for format_feed.config module."""

import logging

import pytest

from format_feed.config import FormatConfig, load_config


class TestFormatConfig:
    def test_defaults(self) -> None:
        config = FormatConfig()
        assert config.list_name == "entries"
        assert config.level == logging.INFO

    def test_log_level_is_uppercased(self) -> None:
        assert FormatConfig(log_level="debug").level == logging.DEBUG

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log_level"):
            FormatConfig(log_level="chatty")

    def test_empty_list_name(self) -> None:
        with pytest.raises(ValueError, match="list_name"):
            FormatConfig(list_name="")


class TestLoadConfig:
    def test_loads_named_config(self, monkeypatch) -> None:
        monkeypatch.delenv("FORMAT_FEED_LOG_LEVEL", raising=False)
        config = load_config("test")
        assert config.log_level == "DEBUG"
        assert config.pretty is True

    def test_loads_config_from_path(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv("FORMAT_FEED_LOG_LEVEL", raising=False)
        path = tmp_path / "custom.yaml"
        path.write_text("list_name: posts\noutput_dir: out\n")

        config = load_config(str(path))

        assert config.list_name == "posts"
        assert config.output_dir == "out"
        assert config.log_level == "INFO"

    def test_environment_overrides_log_level(self, monkeypatch) -> None:
        monkeypatch.setenv("FORMAT_FEED_LOG_LEVEL", "warning")
        assert load_config("prod").log_level == "WARNING"

    def test_missing_config(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("does-not-exist")
