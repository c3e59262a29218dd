"""Application configuration"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    app_name: str = "Disbursement API"
    app_version: str = "0.1.0"
    debug: bool = True

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"

    # Token ledger
    token_name: str = "New Order"
    token_symbol: str = "NEWO"
    token_decimals: int = 18

    # Clock: "system" follows wall time, "manual" only moves via the API
    clock_mode: str = "system"
    manual_clock_start: int | None = None  # Unix timestamp, defaults to now

    # Logging
    log_level: str = "INFO"
    log_renderer: str = "console"  # console or json

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
