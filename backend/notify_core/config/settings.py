"""Notify Core Settings - Environment driven configuration"""
from functools import lru_cache
from typing import List
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings read from the environment or a .env file.

    Variable names are case-insensitive: MONGO_URI, HOST_URL, LOG_LEVEL...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Stores backing the step, directory and membership lookups
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "notify_core_dev"
    mongo_timeout_ms: int = 5000

    # {{task_link}} / {{task_url}} are built as <host_url><task_link_path>?taskId=<id>
    host_url: str = "http://localhost:8080/bonita"
    task_link_path: str = "/app/process-builder"

    # Logging
    logs_path: str = "./logs"
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "text"
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5

    # HTTP surface; "*" allows every origin
    cors_origins: str = "*"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    environment: str = "development"
    debug: bool = True

    @field_validator("task_link_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        value = value.strip()
        return value if value.startswith("/") else "/" + value

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance"""
    return Settings()


settings = get_settings()
