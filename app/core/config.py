"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "user_directory API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    log_level: str = getenv("LOG_LEVEL", "INFO").upper()
    database_url: str = getenv("DATABASE_URL", "sqlite:///./user_directory.db")
    seed_demo_users: bool = getenv("SEED_DEMO_USERS", "1") == "1"


settings: Settings = Settings()
