import logging
import sys
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the Student API"""

    PROJECT_NAME: str = "Student Management API"
    APP_VERSION: str = "1.0.0"

    DATABASE_URL: str = "sqlite:///./students.db"
    DB_ECHO_SQL: bool = False

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()


def setup_logging() -> logging.Logger:
    """Configure root logging to stdout, plus a log file when LOG_FILE is set"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    return logging.getLogger("student_api")
