"""Configuration management for Intentboard.

Loads settings from environment variables with sensible defaults.
Supports .env files via python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_ROOT_SELECTOR = "#intents"
DEFAULT_REFRESH_INTERVAL = 1.0


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    log_level: str = "INFO"
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    root_selector: str = DEFAULT_ROOT_SELECTOR

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file. If None, searches for .env
                     in current directory and parent directories.

        Returns:
            Config instance with values from environment.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()  # Auto-searches for .env

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_levels:
            raise ValueError(
                f"Invalid LOG_LEVEL: {log_level}. Must be one of {valid_levels}"
            )

        raw_interval = os.getenv(
            "INTENTBOARD_REFRESH_INTERVAL", str(DEFAULT_REFRESH_INTERVAL)
        )
        try:
            refresh_interval = float(raw_interval)
        except ValueError:
            raise ValueError(
                f"Invalid INTENTBOARD_REFRESH_INTERVAL: {raw_interval!r}. "
                "Must be a number of seconds"
            ) from None
        if refresh_interval <= 0:
            raise ValueError(
                f"Invalid INTENTBOARD_REFRESH_INTERVAL: {raw_interval!r}. "
                "Must be greater than zero"
            )

        root_selector = os.getenv(
            "INTENTBOARD_ROOT_SELECTOR", DEFAULT_ROOT_SELECTOR
        ).strip()
        if not root_selector:
            raise ValueError("INTENTBOARD_ROOT_SELECTOR cannot be empty")

        return cls(
            log_level=log_level,
            refresh_interval=refresh_interval,
            root_selector=root_selector,
        )
