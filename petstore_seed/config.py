"""
Configuration settings for the PetStore seeder.

Uses Pydantic Settings to load environment variables for the MongoDB
connection, target database and collection names, and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    mongodb_url: str = Field("mongodb://localhost:27017", alias="MONGODB_URL")
    mongodb_database: str = Field("petstore_test", alias="MONGODB_DATABASE")
    mongodb_timeout_ms: int = Field(5_000, alias="MONGODB_TIMEOUT_MS")
    mongodb_connect_retries: int = Field(3, alias="MONGODB_CONNECT_RETRIES")

    # Collection names, resolved per fixture kind
    collection_pets: str = Field("pets", alias="MONGODB_COLLECTION_PETS")
    collection_users: str = Field("users", alias="MONGODB_COLLECTION_USERS")
    collection_orders: str = Field("orders", alias="MONGODB_COLLECTION_ORDERS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def collection_names(self) -> Dict[str, str]:
        """Map each fixture kind to its configured collection name."""
        return {
            "pets": self.collection_pets,
            "users": self.collection_users,
            "orders": self.collection_orders,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
