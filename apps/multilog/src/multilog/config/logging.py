"""
Logging Configuration.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from multilog.exceptions import LoggingConfigError


class LogLevel(IntEnum):
    """Message severity, plus the ALL sentinel used only as a threshold."""

    DEBUG = 0
    INFO = 1
    ERROR = 2
    ALL = 3

    def permits(self, level: "LogLevel") -> bool:
        """Whether a destination configured at this threshold emits `level`."""
        return self is LogLevel.ALL or level >= self


# Keys used by the application's key/value configuration node
_MAPPING_KEYS = {"LogLevel": "level", "LogOutput": "output", "SyslogIdent": "syslog_ident"}

LOG_LEVEL_BY_NAME: dict[str, LogLevel] = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "error": LogLevel.ERROR,
    "all": LogLevel.ALL,
}


def parse_log_level(value: str, *, strict: bool = False) -> LogLevel | None:
    """
    Map a configuration string onto a LogLevel.

    Matching is case-insensitive and ignores surrounding whitespace.
    Unknown values return None, or raise LoggingConfigError when strict.
    """
    level = LOG_LEVEL_BY_NAME.get(str(value).strip().lower())
    if level is None and strict:
        raise LoggingConfigError(key="LogLevel", value=value)
    return level


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MULTILOG_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Kept as raw strings: an invalid level must fail logger construction,
    # not settings loading.
    level: str = Field(default="info", description="Log level (debug, info, error, all)")
    output: str = Field(
        default="",
        description="Comma-separated outputs: stdout, stderr, syslog, or file names",
    )
    syslog_ident: str | None = Field(default=None, description="Identity used when opening the system log")

    @classmethod
    def from_mapping(cls, node: Mapping[str, Any]) -> "LoggingSettings":
        """Build settings from an already-parsed configuration node.

        Values are taken as text, so a non-string level is rejected by the
        logger factory rather than by validation here. None counts as absent.
        """
        overrides = {
            field: str(node[key])
            for key, field in _MAPPING_KEYS.items()
            if node.get(key) is not None
        }
        return cls(**overrides)
