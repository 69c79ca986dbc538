"""
Environment Configuration.

The environment is determined by the `MULTILOG_ENV` environment variable.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


Environment = Literal["development", "testing", "staging", "production"]


class EnvironmentSettings(BaseSettings):
    """
    Environment detection and configuration.

    File Resolution Order:
    1. `.env.{environment}.local` (local overrides, gitignored)
    2. `.env.{environment}` (environment-specific)
    3. `.env.local` (local overrides, gitignored)
    4. `.env` (base defaults)
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTILOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Environment = Field(
        default="development",
        description="Current environment (development, testing, staging, production)",
    )

    @property
    def env_files(self) -> tuple[str, ...]:
        """
        Returns the list of .env files to load in priority order.

        Lower index = higher priority (loaded last, overrides earlier).
        """
        return (
            ".env",
            ".env.local",
            f".env.{self.env}",
            f".env.{self.env}.local",
        )
