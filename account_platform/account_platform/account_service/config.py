"""
Configuration management for the account service
"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


DEV_ENVIRONMENTS = ("local", "development", "dev", "test")


class Settings(BaseSettings):
    """Account service configuration loaded from environment variables"""

    # Server Configuration
    APP_NAME: str = "Account Service"
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./accounts.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Token Configuration
    JWT_SECRET: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 30

    # Password Hashing
    BCRYPT_ROUNDS: int = 10

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in DEV_ENVIRONMENTS


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once at startup."""
    return Settings()
