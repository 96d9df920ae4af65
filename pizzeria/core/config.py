"""Application configuration."""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str

    # Restaurant
    restaurant_name: str = "Pizzeria"
    whatsapp_number: str = "+4915256094733"
    catalog_file: Optional[str] = None

    # Admin dashboard
    dashboard_password: str = "change-me"

    # Cart persistence
    cart_storage_dir: str = ".cart-storage"
    cart_storage_name: str = "cart-storage"
    cart_max_sessions: int = 1000

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
