from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Hub settings, read from HUB_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="HUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    environment: str = "development"
    # CSV strings: pydantic-settings would json.loads a list[str] field.
    cors_origins: str = "http://localhost:3100,http://localhost:3000"
    publish_keys: str = ""
    sse_ping_seconds: int = Field(default=15, gt=0)
    client_queue_maxsize: int = Field(default=64, gt=0)
    inbox_backlog_warning: int = Field(default=1000, gt=0)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins(self) -> list[str]:
        return _split_csv(self.cors_origins)

    def get_publish_keys(self) -> list[str]:
        return _split_csv(self.publish_keys)

    def validate_production(self) -> None:
        """Refuse to serve an open publish endpoint or dev origins in production."""
        if not self.is_production:
            return
        if not self.get_publish_keys():
            raise ValueError(
                "HUB_PUBLISH_KEYS must be set in production; "
                "anyone could otherwise publish events."
            )
        local = [
            origin
            for origin in self.get_cors_origins()
            if "localhost" in origin or "127.0.0.1" in origin
        ]
        if local:
            raise ValueError(
                f"HUB_CORS_ORIGINS contains local origins {local} in production."
            )
