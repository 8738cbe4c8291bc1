"""Application configuration loaded from environment."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVER_URL = "http://localhost:3001"


class Settings(BaseSettings):
    """flowdeck settings from env vars."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Automation server (runs the Playwright flows); VITE_ name kept for existing .env files
    automation_server_url: str = Field(
        default=DEFAULT_SERVER_URL,
        validation_alias=AliasChoices("automation_server_url", "vite_automation_server_url"),
    )
    # Health probe must answer quickly; flows can take minutes
    health_timeout_seconds: float = 4.0
    flow_timeout_seconds: float = 600.0
    # True = refuse to start a flow whose previous run is still in flight
    reject_concurrent_runs: bool = False

    # Notifications kept for the dashboard toast feed
    notification_history_size: int = 100

    # Slack (optional mirror of notifications)
    slack_bot_token: str = ""
    slack_channel_id: str = ""

    # Dashboard server
    dashboard_host: str = "127.0.0.1"
    dashboard_port: int = 8080

    log_level: str = "INFO"

    @field_validator("automation_server_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = (value or "").strip()
        return value.rstrip("/") if value else DEFAULT_SERVER_URL


def get_settings() -> Settings:
    """Return loaded settings from environment (and .env if present)."""
    return Settings()
