"""
Multilog Configuration Module.

Each sub-module represents an independent concern with its own environment
variable prefix.

Multi-Environment Support:
    Set `MULTILOG_ENV` to one of: development, testing, staging, production
    The system will load .env files in this order (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

Usage:
    from multilog.config import settings

    settings.environment.env  # "development"
    settings.logging.level  # "info"
    settings.logging.output  # "stdout, multilog.log"
"""

from functools import cached_property

from pydantic_settings import BaseSettings

from .environment import EnvironmentSettings
from .logging import LOG_LEVEL_BY_NAME, LoggingSettings, LogLevel, parse_log_level


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings(_env_file=self.environment.env_files)


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "EnvironmentSettings",
    "LoggingSettings",
    "LogLevel",
    "LOG_LEVEL_BY_NAME",
    "parse_log_level",
]
