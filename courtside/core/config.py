"""
Centralized configuration management with validation.

All environment variables are loaded and validated here.
This ensures consistent configuration across the application.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation."""

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Database Configuration
    # Local SQLite file by default; any SQLAlchemy URL works.
    DATABASE_URL: str = Field(default="sqlite:///data/courtside.db")
    DB_ECHO: bool = Field(default=False)

    # Logging Configuration
    # The terminal belongs to the UI, so logs always go to a file.
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")  # json or text
    LOG_FILE: str = Field(default="logs/courtside.log")

    # Startup
    # Username used when --user is not passed on the command line.
    DEFAULT_USER: Optional[str] = Field(default=None)

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)


# Global settings instance
settings = Settings()
