"""Application configuration management using Pydantic Settings."""

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application Environment
    app_env: str = Field(default="development", alias="APP_ENV")

    # Flask Configuration
    secret_key: str = Field(..., alias="SECRET_KEY")
    flask_app: str = Field(default="wsgi.py", alias="FLASK_APP")
    flask_env: str = Field(default="development", alias="FLASK_ENV")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Projection defaults used when a request omits a value
    default_pia: float = Field(default=1000.0, ge=0, alias="DEFAULT_PIA")
    default_age_at_death: float = Field(
        default=100.0, ge=62, le=200, alias="DEFAULT_AGE_AT_DEATH"
    )
    default_max_age: float = Field(default=100.0, ge=62, le=200, alias="DEFAULT_MAX_AGE")

    # Optimum claiming-age summary grid
    summary_min_rate: int = Field(default=-4, alias="SUMMARY_MIN_RATE")
    summary_max_rate: int = Field(default=8, alias="SUMMARY_MAX_RATE")
    summary_age_step: int = Field(default=2, ge=1, le=10, alias="SUMMARY_AGE_STEP")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v):
        """Ensure SECRET_KEY is provided and not a placeholder."""
        if not v or v == "your-secret-key-here-change-in-production":
            raise ValueError("SECRET_KEY must be set to a secure value")
        return v

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v):
        """Validate application environment."""
        allowed_envs = {"development", "testing", "production"}
        if v not in allowed_envs:
            raise ValueError(f"APP_ENV must be one of {allowed_envs}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @model_validator(mode="after")
    def validate_summary_rates(self) -> "Settings":
        """Ensure the summary grid has at least one interest-rate column."""
        if self.summary_min_rate > self.summary_max_rate:
            raise ValueError("SUMMARY_MIN_RATE must not exceed SUMMARY_MAX_RATE")
        return self


def get_settings(env_file: Optional[str] = None) -> Settings:
    """Get application settings instance."""
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()


# Global settings instance - created on first use
_settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = get_settings()
    return _settings


def reset_global_settings() -> None:
    """Reset global settings instance (useful for testing)."""
    global _settings
    _settings = None
