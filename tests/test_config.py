"""Tests for environment-driven settings."""

import pytest

from receipt_processor.config import DEFAULT_PORT, Settings, load_settings


class TestLoadSettings:
    def test_defaults(self):
        assert load_settings({}) == Settings(host="0.0.0.0", port=DEFAULT_PORT, log_level="INFO")
        assert DEFAULT_PORT == 8087

    def test_overrides(self):
        settings = load_settings({"HOST": "127.0.0.1", "PORT": "9000", "LOG_LEVEL": "debug"})
        assert settings == Settings(host="127.0.0.1", port=9000, log_level="DEBUG")

    @pytest.mark.parametrize("port", ["http", "0", "70000", ""])
    def test_bad_port(self, port: str):
        with pytest.raises(ValueError, match="PORT"):
            load_settings({"PORT": port})

    def test_bad_log_level(self):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            load_settings({"LOG_LEVEL": "chatty"})

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PORT", "8123")
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert load_settings().port == 8123
