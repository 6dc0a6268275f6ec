"""Fuel Tracker Backend — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/fuel_tracker.db"

    # Security
    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60

    # Optional bootstrap admin (created on startup when both are set)
    ADMIN_EMAIL: str = ""
    ADMIN_PASSWORD: str = ""

    # Timezone
    TIMEZONE: str = "Asia/Jerusalem"

    # Outbound mail (SMTP + STARTTLS)
    MAIL_USER: str = ""
    MAIL_PASS: str = ""
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_FROM: str = ""
    MAIL_TIMEOUT: float = 30.0

    # Price pipeline
    PRICE_VARIATION: float = 0.10  # max absolute perturbation per tick
    ALERT_SUPPRESSION_HOURS: int = 24
    SCHEDULER_ENABLED: bool = True
    SEED_SAMPLE_DATA: bool = True

    # HTTP
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "*"]

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
