# storefront/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized storefront settings loaded from environment.

    Optional env vars (.env):
      - DATABASE_URL (durable key-value store; SQLite file by default)
      - API_DELAY_SECONDS / LIST_USERS_DELAY_SECONDS (mock latency)
      - USE_MOCK_API (route account flows through the latent mock service)
      - LOG_LEVEL
    """

    PROJECT_NAME: str = "Storefront Core"

    # Durable storage
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # Storage keys, one JSON value per key
    CART_KEY: str = "ecom_cart"
    FAVORITES_KEY: str = "ecom_favorites"
    USERS_KEY: str = "ecom_users"
    SESSION_KEY: str = "ecom_currentUser"

    # Mock backend latency (seconds)
    API_DELAY_SECONDS: float = 0.42
    LIST_USERS_DELAY_SECONDS: float = 0.12
    USE_MOCK_API: bool = True

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every lookup.
    """
    return Settings()
