"""
Message formatting helpers.

Every message entering the fan-out is a plain, bounded-length string; the
destinations only add a level tag and a line terminator.
"""

from __future__ import annotations

from typing import Any

from structlog.typing import EventDict

from multilog.config.logging import LogLevel

# Longest message (in characters) that reaches a destination
MAX_LOG_LENGTH = 2048

LEVEL_TAGS = {
    LogLevel.DEBUG: "[Debug]",
    LogLevel.INFO: "[Info]",
    LogLevel.ERROR: "[Error]",
}


def truncate(message: str, limit: int = MAX_LOG_LENGTH) -> str:
    return message if len(message) <= limit else message[:limit]


def format_message(fmt: Any, *args: Any) -> str:
    """
    Resolve a printf-style format string against its arguments.

    Never raises: a format string that does not match its arguments is
    rendered verbatim, followed by the arguments.
    """
    text = str(fmt)
    if args:
        try:
            text = text % args
        except (TypeError, ValueError, KeyError, OverflowError):
            text = " ".join([text, *(str(arg) for arg in args)])
    return truncate(text)


def tag_line(level: LogLevel, message: str, *, newline: bool = True) -> str:
    """Prefix `message` with its level tag, e.g. ``[Info] started``."""
    line = f"{LEVEL_TAGS[level]} {message}"
    return line + "\n" if newline else line


# =============================================================================
# structlog event flattening
# =============================================================================

EXCLUDED_KEYS = {"level", "event", "logger", "timestamp", "_name", "_record", "_from_structlog"}


def flatten_event(event_dict: EventDict) -> str:
    """Render a structlog event as ``[logger: ]event key=value ...``."""
    message = str(event_dict.get("event", ""))
    logger_name = event_dict.get("logger")

    extras = [f"{k}={v}" for k, v in event_dict.items() if k not in EXCLUDED_KEYS]
    if extras:
        message = f"{message} " + " ".join(extras)
    if logger_name:
        message = f"{logger_name}: {message}"
    return truncate(message)
