from pydantic_settings import BaseSettings
import os
from pathlib import Path
import logging

from dotenv import load_dotenv

_logger = logging.getLogger(__name__)

# Look for .env in api directory (parent of school_admin directory)
api_dir = Path(__file__).parent.parent.parent
env_path = api_dir / ".env"

if env_path.exists():
    load_dotenv(env_path, override=True)
    _logger.info(f"Loaded .env file from: {env_path}")
else:
    # Fallback to current directory
    current_env = Path(".env")
    if current_env.exists():
        load_dotenv(current_env, override=True)
        _logger.info(f"Loaded .env file from: {current_env.absolute()}")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database - hosted Postgres provides DATABASE_URL (uppercase)
    database_url: str = "sqlite:///./school_admin.db"

    # API
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = ["*"]

    # Runtime
    environment: str = "production"
    log_level: str = "INFO"

    # School-local timezone, decides what "today" is for the schedule
    timezone: str = "Europe/Kyiv"

    # Lesson generation horizon, in weeks
    schedule_weeks_ahead_default: int = 8
    schedule_weeks_ahead_min: int = 1
    schedule_weeks_ahead_max: int = 52

    # Lessons
    default_lesson_duration_minutes: int = 90
    upcoming_lessons_limit: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False

    def __init__(self, **kwargs):
        # Ensure we read DATABASE_URL from environment (hosting providers set it uppercase)
        if not kwargs.get("database_url") and os.getenv("DATABASE_URL"):
            kwargs["database_url"] = os.getenv("DATABASE_URL")
        super().__init__(**kwargs)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")


# Create settings instance
settings = Settings()
