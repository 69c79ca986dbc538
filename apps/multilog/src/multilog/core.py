"""
Process-wide logger handle, free-function dispatch and the config factory.
"""

from __future__ import annotations

import sys
from typing import IO, Any, Mapping

from multilog.config.logging import LoggingSettings, LogLevel, parse_log_level
from multilog.destinations import (
    CompositeLogger,
    ConsoleDestination,
    Destination,
    FileDestination,
    SystemDestination,
)
from multilog.formatters import format_message

# Return values for the "log and return" idiom: `return error_log(...)`
OKAY = True
FAIL = False

SUPPORTED_DESTINATIONS = ("stdout", "stderr", "syslog")

# =============================================================================
# Global State
# =============================================================================

_logger: Destination | None = None


def get_logger() -> Destination | None:
    """Return the installed process-wide logger, or None."""
    return _logger


def set_logger(logger: Destination | None) -> None:
    """Install (or, with None, remove) the process-wide logger."""
    global _logger
    _logger = logger


# =============================================================================
# Free Functions
# =============================================================================


def debug_log(fmt: Any, *args: Any) -> None:
    logger = _logger
    if logger is None:
        return
    logger.debug_log(format_message(fmt, *args))


def info_log(fmt: Any, *args: Any) -> None:
    logger = _logger
    if logger is None:
        return
    logger.info_log(format_message(fmt, *args))


def error_log(fmt: Any, *args: Any) -> bool:
    """Log an error and return FAIL, so callers can `return error_log(...)`."""
    logger = _logger
    if logger is None:
        return FAIL
    logger.error_log(format_message(fmt, *args))
    return FAIL


# =============================================================================
# Factory
# =============================================================================


def _as_settings(config: LoggingSettings | Mapping[str, Any] | None) -> LoggingSettings:
    if config is None:
        from multilog.config import settings

        return settings.logging
    if isinstance(config, LoggingSettings):
        return config
    return LoggingSettings.from_mapping(config)


def parse_outputs(log_output: str) -> tuple[list[str], list[str]]:
    """
    Split a LogOutput string into (destination keywords, filenames).

    Keywords are matched case-insensitively; anything else is a filename,
    kept with its original case. Both lists are de-duplicated in
    first-seen order.
    """
    destinations: dict[str, None] = {}
    filenames: dict[str, None] = {}
    for output in log_output.split(","):
        trimmed = output.strip()
        canonical = trimmed.lower()
        if canonical in SUPPORTED_DESTINATIONS:
            destinations.setdefault(canonical)
        elif canonical:
            filenames.setdefault(trimmed)
    return list(destinations), list(filenames)


def create_logger(config: LoggingSettings | Mapping[str, Any] | None = None) -> CompositeLogger | None:
    """
    Build a CompositeLogger from configuration.

    Returns None (after reporting through error_log) when the log level is
    not one of debug, info, error or all.
    """
    log_settings = _as_settings(config)

    log_level = parse_log_level(log_settings.level)
    if log_level is None:
        error_log("Invalid log level: %s", log_settings.level.strip().lower())
        return None

    # Console error output is always present
    loggers: list[Destination] = [ConsoleDestination()]

    destinations, filenames = parse_outputs(log_settings.output)

    streams: list[IO[str]] = []
    if "stdout" in destinations:
        streams.append(sys.stdout)
    if "stderr" in destinations:
        streams.append(sys.stderr)

    if filenames or streams:
        loggers.append(FileDestination(log_level, filenames, streams))

    if "syslog" in destinations:
        loggers.append(SystemDestination(log_level, ident=log_settings.syslog_ident))

    return CompositeLogger(loggers)


# =============================================================================
# Lifecycle
# =============================================================================


def configure_logging(config: LoggingSettings | Mapping[str, Any] | None = None) -> bool:
    """
    Build a logger from configuration and install it process-wide.

    Args:
        config: LoggingSettings, a key/value node with LogLevel/LogOutput
            keys, or None to use `multilog.config.settings.logging`.

    Returns:
        OKAY when a logger was installed, FAIL on invalid configuration
        (the previous logger, if any, stays installed).
    """
    logger = create_logger(config)
    if logger is None:
        return FAIL

    previous = get_logger()
    set_logger(logger)
    if previous is not None:
        previous.close()
    return OKAY


def shutdown_logging() -> None:
    """Uninstall the process-wide logger and release its resources."""
    logger = get_logger()
    set_logger(None)
    if logger is not None:
        logger.close()
