"""
Configuration module for the throttled webhook relay.

Manages environment variables for the listening port, the outbound
webhook endpoint and the throttle interval. Values are read once at
startup; changing them requires a restart.
"""

import os
from dataclasses import dataclass, field


DEFAULT_WEBHOOK_URL = "https://api.thingspeak.com/update.json"


@dataclass(frozen=True)
class RelayConfig:
    """
    Immutable configuration for the forwarding queue.

    Attributes:
        webhook_url: External endpoint every payload is POSTed to
        throttle_ms: Minimum spacing between the start of two forwards (ms)
    """
    webhook_url: str = DEFAULT_WEBHOOK_URL
    throttle_ms: int = 15000  # 15 seconds

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every outbound webhook call."""
        return {"Content-Type": "application/json"}


@dataclass(frozen=True)
class Settings:
    """
    Central settings object that aggregates all configuration.

    Use Settings.from_env() at startup; tests build instances directly.
    """
    relay: RelayConfig = field(default_factory=RelayConfig)
    server_port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration from environment variables with defaults."""
        return cls(
            relay=RelayConfig(
                webhook_url=os.getenv("WEBHOOK_URL", DEFAULT_WEBHOOK_URL),
                throttle_ms=int(os.getenv("THROTTLE_MS", "15000")),
            ),
            server_port=int(os.getenv("PORT", "8080")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def api_title(self) -> str:
        """API title for OpenAPI documentation."""
        return "Throttled Webhook Relay"

    @property
    def api_version(self) -> str:
        """API version string."""
        return "1.0.0"

    @property
    def api_description(self) -> str:
        """API description for OpenAPI documentation."""
        return (
            "Accepts JSON payloads, queues them and forwards them one at a "
            "time to a fixed webhook endpoint, at most once per throttle interval."
        )


# Global settings instance - imported throughout the application
settings = Settings.from_env()
