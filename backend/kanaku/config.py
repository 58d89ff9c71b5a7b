"""
Configuration settings for Kanaku360.

Loads environment variables from .env file and provides typed configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_PREFIX: str = "/api"
    API_TITLE: str = "Kanaku360 API"
    API_VERSION: str = "1.0.0"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Security Configuration
    SECRET_KEY: str = Field(
        default="4f1c2d7e9a0b3c5d6e8f1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1c2d",
        description="Secret key for JWT",
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60 * 12, description="Access token expiration time in minutes"
    )
    LOGIN_RATE_LIMIT: str = Field(
        default="10/minute", description="slowapi limit for the token endpoint"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./data/kanaku.db", description="SQLAlchemy database URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )

    # Billing Configuration
    BILL_NUMBER_PREFIX: str = Field(default="BILL", description="Prefix for bill numbers")
    PO_NUMBER_PREFIX: str = Field(default="PO", description="Prefix for purchase order numbers")
    DEFAULT_LOW_STOCK_THRESHOLD: float = Field(
        default=10, description="Low stock threshold for tracked products"
    )
    DEFAULT_PRICE_TYPE_NAME: str = "Retail"
    DEFAULT_PRICE_TYPE_DESCRIPTION: str = "Default retail price"

    # Receipt Configuration
    RECEIPT_WIDTH: int = Field(
        default=48, description="Characters per line on the thermal printer (80mm)"
    )
    CURRENCY_SYMBOL: str = Field(default="₹", description="Currency symbol on receipts")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ENABLE_FILE_LOGGING: bool = Field(
        default=False, description="Enable logging to file"
    )
    LOG_DIR: str = Field(default="./logs", description="Directory for log files")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
