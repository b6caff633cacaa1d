"""Tests for environment-driven configuration."""
from app.core.config import DEFAULT_WEBHOOK_URL, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PORT", "WEBHOOK_URL", "THROTTLE_MS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.server_port == 8080
        assert settings.relay.webhook_url == DEFAULT_WEBHOOK_URL
        assert settings.relay.throttle_ms == 15000
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")
        monkeypatch.setenv("WEBHOOK_URL", "https://hooks.test/in")
        monkeypatch.setenv("THROTTLE_MS", "500")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.server_port == 9090
        assert settings.relay.webhook_url == "https://hooks.test/in"
        assert settings.relay.throttle_ms == 500
        assert settings.log_level == "DEBUG"

    def test_outbound_headers_are_json_only(self):
        assert Settings().relay.headers == {"Content-Type": "application/json"}
