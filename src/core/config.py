"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="User Profile Service")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(
        default=None,
        description="Render logs as JSON (defaults to True in production)",
    )

    # Phone numbers
    enabled_phone_countries: str = Field(
        default="BG,RO",
        description="Comma-separated ISO alpha-2 codes with phone number rules enabled",
    )

    # Avatars
    avatar_inspection: str = Field(
        default="magic",
        description="Content type probing for avatars: 'magic' (libmagic) or 'extension'",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def render_json_logs(self) -> bool:
        """Whether log lines are rendered as JSON."""
        if self.log_json is None:
            return self.is_production
        return self.log_json

    @computed_field  # type: ignore[prop-decorator]
    @property
    def enabled_phone_countries_list(self) -> list[str]:
        """Parse enabled phone countries into a list of upper-case codes."""
        return [
            code.strip().upper()
            for code in self.enabled_phone_countries.split(",")
            if code.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
