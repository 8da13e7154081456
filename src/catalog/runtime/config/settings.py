from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.catalog.runtime.config.config_data import DEV_API_KEY, ConfigData


class EnvironmentVariables(BaseSettings):
    """Simple primitive values loaded from environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Environment and deployment
    environment: Literal["development", "production", "test"] = Field(
        default="development", validation_alias="APP_ENVIRONMENT"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Storage
    database_url: str = Field(
        default="sqlite:///./catalog.db", validation_alias="DATABASE_URL"
    )
    database_backend: Literal["sql", "memory"] = Field(
        default="sql", validation_alias="DATABASE_BACKEND"
    )

    # Security
    api_key: str = Field(default=DEV_API_KEY, validation_alias="API_KEY")

    def to_config(self) -> ConfigData:
        """Build a ConfigData from the environment when no config.yaml is present."""
        config = ConfigData()
        config.app.environment = self.environment
        config.logging.level = self.log_level
        config.database.url = self.database_url
        config.database.backend = self.database_backend
        config.security.api_key = self.api_key
        return config
