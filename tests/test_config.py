"""Tests for startup config validation."""

import pytest

from nrr_api import config


class TestValidateConfig:
    def test_defaults_are_valid(self):
        config.validate_config()

    def test_template_without_placeholders(self, monkeypatch):
        monkeypatch.setattr(config, "ESPN_TABLE_URL_TEMPLATE", "https://www.espn.in/cricket/table")
        with pytest.raises(RuntimeError, match="placeholders"):
            config.validate_config()

    def test_stale_ttl_shorter_than_fresh(self, monkeypatch):
        monkeypatch.setattr(config, "STANDINGS_STALE_TTL_SECONDS", 10)
        with pytest.raises(RuntimeError, match="STANDINGS_STALE_TTL_SECONDS"):
            config.validate_config()

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_LEVEL", "LOUD")
        with pytest.raises(RuntimeError, match="LOG_LEVEL"):
            config.validate_config()

    def test_env_int_falls_back_on_garbage(self, monkeypatch):
        monkeypatch.setenv("ESPN_TIMEOUT_SECONDS", "soon")
        assert config._get_env_int("ESPN_TIMEOUT_SECONDS", 20) == 20
