"""
Configuration settings for the Table QA Service.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development (see .env.example).

Only the HTTP layer reads these settings. The loader and the connector
receive explicit values from it.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Table QA Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Hugging Face Inference ===
    HUGGINGFACE_TOKEN: str = ""  # Bearer credential, never logged
    HF_INFERENCE_URL: str = (
        "https://api-inference.huggingface.co/models/google/tapas-base-finetuned-wtq"
    )
    INFERENCE_TIMEOUT: float = 30.0  # seconds, whole request deadline

    # === Table Source ===
    TABLE_CSV_PATH: str = "data-series.csv"  # Re-read on every request
    CSV_DELIMITER: str = ","

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True

    # === Server ===
    HOST: str = "0.0.0.0"
    PORT: int = 8080


# Global settings instance
settings = Settings()
