"""Application configuration."""

import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Storage
    db_path: str = os.getenv("DB_PATH", "data/actionplan.db")

    # Plan
    plan_horizon_days: int = int(os.getenv("PLAN_HORIZON_DAYS", "90"))
    fast_start_threshold: int = int(os.getenv("FAST_START_THRESHOLD", "3"))
    momentum_threshold: int = int(os.getenv("MOMENTUM_THRESHOLD", "3"))

    # Account metrics used to seed goals on first run
    account_followers: float = float(os.getenv("ACCOUNT_FOLLOWERS", "0"))
    account_impressions: float = float(os.getenv("ACCOUNT_IMPRESSIONS", "0"))
    account_revenue: float = float(os.getenv("ACCOUNT_REVENUE", "0"))

    # Server
    server_host: str = os.getenv("SERVER_HOST", "0.0.0.0")
    server_port: int = int(os.getenv("SERVER_PORT", "8000"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False


settings = Settings()
