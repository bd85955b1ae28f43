"""
Configuration module for environment variable validation and type-safe config.

This module validates the environment variables used to build vendor
clients and provides a type-safe configuration object.
"""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Type-safe configuration object with validated environment variables."""

    aws_region: str = "us-east-1"
    playfab_title_id: Optional[str] = None
    playfab_developer_secret_key: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config instance from environment variables.

        Raises:
            ValueError: If environment variables are present but invalid.
        """
        aws_region = os.environ.get("AWS_REGION", "us-east-1").strip()
        if not aws_region:
            raise ValueError("AWS_REGION environment variable must not be empty")

        playfab_title_id = os.environ.get("PLAYFAB_TITLE_ID") or None
        playfab_developer_secret_key = (
            os.environ.get("PLAYFAB_DEVELOPER_SECRET_KEY") or None
        )
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Validate log level
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_log_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_log_levels}, got: {log_level}"
            )

        return cls(
            aws_region=aws_region,
            playfab_title_id=playfab_title_id,
            playfab_developer_secret_key=playfab_developer_secret_key,
            log_level=log_level,
        )


_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The validated configuration object

    Raises:
        ValueError: If environment variables are invalid.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
