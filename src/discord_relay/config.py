"""Application configuration via pydantic-settings."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised at startup when a required setting is missing."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Discord
    discord_bot_token: str = ""
    target_channels: str = ""  # Comma-separated channel IDs
    target_channel_id: str = ""  # Single-channel variant, merged into the allow-list

    # Webhook
    n8n_webhook_url: str = ""

    # App
    log_level: str = "INFO"
    port: int = 8080

    @property
    def allowed_channels(self) -> frozenset[str]:
        """Channel allow-list parsed from TARGET_CHANNELS and TARGET_CHANNEL_ID."""
        ids = [part.strip() for part in self.target_channels.split(",")]
        ids.append(self.target_channel_id.strip())
        return frozenset(i for i in ids if i)

    @property
    def webhook_url(self) -> str | None:
        url = self.n8n_webhook_url.strip()
        return url or None


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()


def validate_settings(settings: Settings) -> None:
    """Fail fast when required settings are missing.

    DISCORD_BOT_TOKEN and a non-empty channel allow-list are required. A missing
    N8N_WEBHOOK_URL only disables forwarding, so it is reported as a warning.

    Raises:
        ConfigurationError: listing every missing required setting.
    """
    missing: list[str] = []
    if not settings.discord_bot_token.strip():
        missing.append("DISCORD_BOT_TOKEN")
    if not settings.allowed_channels:
        missing.append("TARGET_CHANNELS")

    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}"
        )

    if settings.webhook_url is None:
        logger.warning("N8N_WEBHOOK_URL is not configured; events will not be forwarded")

    logger.info(
        "Configuration loaded: %d allowed channel(s), webhook %s",
        len(settings.allowed_channels),
        "configured" if settings.webhook_url else "disabled",
    )
