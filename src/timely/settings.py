from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timely.utils.paths import get_default_log_dir
from timely.utils.time import parse_start_time


class Settings(BaseSettings):
    """Application-wide settings read from the environment and .env."""

    app_name: str = "timely"
    debug: bool = Field(default=False, description="Master toggle for verbose logging")

    # Paths
    log_dir: Path = Field(default_factory=get_default_log_dir)
    log_to_file: bool = True

    def model_post_init(self, __context):
        self.log_dir = self.log_dir.resolve()

    # Form defaults
    work_hours: float = Field(default=7, gt=0)
    lunch_break: float = Field(default=1.5, gt=0)
    short_break: float = Field(default=10, gt=0)
    work_session: float = Field(default=50, gt=0)
    start_hour: str = "09:00"

    # Display
    clock_interval_seconds: float = Field(default=1.0, gt=0)
    show_banner: bool = True

    model_config = SettingsConfigDict(
        env_prefix="TIMELY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("start_hour")
    @classmethod
    def _check_start_hour(cls, value: str) -> str:
        parse_start_time(value)
        return value


def load_settings() -> Settings:
    """Loads settings from the environment."""
    return Settings()


# The single source of truth for the app
settings = load_settings()
