"""
Configuration settings for the bounce classifier.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Model bundle shipped next to the package (vocab.json, labels.json, weights.bin)
DEFAULT_MODEL_DIR = Path(__file__).resolve().parent / "model"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Bounce Classifier"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None  # None: JSON only when ENVIRONMENT=production
    ENVIRONMENT: str = "development"

    # === Model Bundle ===
    MODEL_PATH: str = str(DEFAULT_MODEL_DIR)  # Directory or http(s) URL
    MODEL_LOAD_TIMEOUT: float = 30.0  # seconds, only used for URL loading
    PRELOAD_MODEL: bool = True  # Load the bundle on API startup

    # === Input Processing ===
    MAX_MESSAGE_LENGTH: int = 10000  # chars, applied before any processing
    BATCH_MAX_SIZE: int = 1000

    # === API ===
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
