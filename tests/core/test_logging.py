"""
Tests for channel-aware logging configuration.
"""

import pytest

from dire.core.logging import (
    LogChannel,
    LogLevel,
    configure_logging,
    get_current_config,
    get_logger,
    get_rule_logger,
)


@pytest.fixture(autouse=True)
def restore_silence():
    yield
    configure_logging(level="silent", force=True)


class TestLogLevel:

    def test_from_string(self):
        assert LogLevel.from_string("verbose") == LogLevel.VERBOSE
        assert LogLevel.from_string("DEBUG") == LogLevel.DEBUG

    def test_unknown_defaults_to_info(self):
        assert LogLevel.from_string("loud") == LogLevel.INFO


class TestConfigureLogging:

    def test_explicit_settings(self):
        configure_logging(level="debug", format="json", channels=["rule", "store"], force=True)
        config = get_current_config()
        assert config["level"] == "DEBUG"
        assert config["format"] == "json"
        assert sorted(config["channels"]) == ["RULE", "STORE"]

    def test_env_settings(self, monkeypatch):
        monkeypatch.setenv("DIRE_LOG_LEVEL", "verbose")
        monkeypatch.setenv("DIRE_LOG_CHANNELS", "vocab,bogus")
        configure_logging(force=True)
        config = get_current_config()
        assert config["level"] == "VERBOSE"
        assert config["channels"] == ["VOCAB"]

    def test_without_force_is_noop(self):
        configure_logging(level="debug", force=True)
        configure_logging(level="info")
        assert get_current_config()["level"] == "DEBUG"


class TestLoggers:

    def test_channel_logger(self):
        assert get_logger(LogChannel.STORE).channel == LogChannel.STORE
        assert get_logger("groups").channel == LogChannel.GROUPS

    def test_rule_logger(self):
        log = get_rule_logger("skills")
        assert log.channel == LogChannel.RULE
        assert log.name == "dire.rules.skills"

    def test_filtered_channel_is_silent(self, capsys):
        configure_logging(level="debug", channels=["store"], force=True)
        get_rule_logger("skills").info("rewrote")
        assert "rewrote" not in capsys.readouterr().err
