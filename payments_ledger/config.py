"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class LedgerConfig(BaseSettings):
    """Payments ledger configuration"""

    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_LEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["text", "json"] = "text"
    log_file: Optional[str] = None  # If None, logs to stderr

    # Output configuration
    sort_output: bool = True  # Ascending client id; False keeps first-seen order

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


# Global configuration instance, created on first use
config: Optional[LedgerConfig] = None


def get_config() -> LedgerConfig:
    """
    Get global configuration instance

    Raises:
        pydantic.ValidationError: If the environment holds an invalid setting
    """
    global config
    if config is None:
        config = LedgerConfig()
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
