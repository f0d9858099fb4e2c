"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./limite_real.db"
    profile_key: str = "default"  # Single implicit user

    # Service
    service_name: str = "limite-real-gateway"
    log_level: str = "INFO"

    # Gateway client (used by the chat bot)
    gateway_api_base: str = "http://localhost:8000"
    http_timeout_seconds: float = 5.0
    local_cache_path: str = "./.limite_real_cache.json"


settings = Settings()
