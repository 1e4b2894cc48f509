"""
Application configuration using Pydantic Settings.
"""

import os
from decimal import Decimal
from functools import lru_cache
from pydantic_settings import BaseSettings

from mortgage_sim.calculations.scenarios import DEFAULT_INVESTMENT_RATE, WinnerRule


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Mortgage Strategy Simulator"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Calculation defaults
    default_investment_rate: Decimal = DEFAULT_INVESTMENT_RATE
    winner_rule: WinnerRule = WinnerRule.net_difference

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
