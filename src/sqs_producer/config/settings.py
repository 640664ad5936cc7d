"""
Module: settings.py
Description: Application configuration using pydantic-settings.

Configures the SQS connection and producer defaults from environment
variables with validation and defaults. Supports .env files for local
development (e.g. pointing sqs_endpoint_url at LocalStack).
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_region: Optional[str] = Field(default=None, description="Default AWS region")

    # SQS connection settings
    sqs_dsn: Optional[str] = Field(
        default=None,
        description="SQS DSN, e.g. 'sqs:?region=us-east-1&lazy=0'"
    )
    sqs_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom SQS endpoint (LocalStack, ElasticMQ)"
    )
    sqs_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Transport-level retry attempts configured on the boto3 client"
    )
    sqs_lazy: bool = Field(
        default=True,
        description="Create the boto3 client on first use instead of eagerly"
    )

    # Producer settings
    delivery_delay: Optional[int] = Field(
        default=None,
        ge=0,
        description="Default producer delivery delay in milliseconds"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator('sqs_dsn')
    @classmethod
    def validate_sqs_dsn(cls, v: Optional[str]) -> Optional[str]:
        """Validate the DSN uses the sqs scheme."""
        if v is None:
            return v

        if not v.startswith("sqs:"):
            raise ValueError("sqs_dsn must start with 'sqs:'")

        return v


# Global settings instance
settings = Settings()
