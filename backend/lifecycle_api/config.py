"""
Configuration settings for the Lifecycle Marketing API.
Loads from environment variables with validation.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Lifecycle Marketing API"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    CREATE_TABLES_ON_STARTUP: bool = True

    # Demo data (see lifecycle_api.scripts.seed)
    DEMO_CUSTOMER_EMAIL: str = "demo@example.com"

    # Lifecycle thresholds
    LIFECYCLE_VIP_MIN_ORDERS: int = Field(5, ge=1)
    LIFECYCLE_VIP_MIN_SPEND_CENTS: int = Field(50_000, ge=1)  # $500
    LIFECYCLE_REPEAT_MIN_ORDERS: int = Field(2, ge=1)
    LIFECYCLE_CART_LOOKBACK_HOURS: int = Field(24, ge=1)
    LIFECYCLE_WINBACK_INACTIVE_DAYS: int = Field(75, ge=1)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings loader."""
    return Settings()
