"""
Interceptors routing standard library and structlog output through the
process-wide logger.
"""

from __future__ import annotations

import logging

import structlog
from structlog.typing import EventDict, WrappedLogger

from multilog import core
from multilog.config.logging import LogLevel, parse_log_level
from multilog.formatters import flatten_event

# =============================================================================
# Standard library logging
# =============================================================================


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records to the installed logger.

    Records at ERROR and above become error messages, INFO and WARNING
    become info messages, everything below becomes debug.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                core.error_log("%s", message)
            elif record.levelno >= logging.INFO:
                core.info_log("%s", message)
            else:
                core.debug_log("%s", message)
        except Exception:
            self.handleError(record)


def intercept_stdlib_logging(level: int | str = logging.DEBUG) -> RedirectStdLibHandler:
    """Replace the root logger's handlers with a RedirectStdLibHandler."""
    handler = RedirectStdLibHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    return handler


# =============================================================================
# structlog
# =============================================================================

_LEVEL_BY_METHOD = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warning": LogLevel.INFO,
    "warn": LogLevel.INFO,
    "error": LogLevel.ERROR,
    "critical": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "fatal": LogLevel.ERROR,
}

_STDLIB_LEVEL = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.ALL: logging.NOTSET,
}


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Move the bound `_name` into the `logger` key."""
    name = event_dict.pop("_name", None)
    if name:
        event_dict["logger"] = name
    return event_dict


def destination_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Flatten the event and hand it to the installed logger. Returns empty to suppress default output."""
    message = flatten_event(event_dict)
    level = _LEVEL_BY_METHOD.get(method_name, LogLevel.INFO)
    installed = core.get_logger()
    if installed is not None:
        installed.log(level, message)
    return ""


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: object) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def configure_structlog(level: str | LogLevel = "debug") -> None:
    """Route structlog events through the installed logger."""
    if not isinstance(level, LogLevel):
        level = parse_log_level(level, strict=True)

    structlog.configure(
        processors=[
            add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            destination_renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_STDLIB_LEVEL[level]),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_structlog_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a structlog logger whose events land in the installed logger."""
    if name:
        return structlog.get_logger(_name=name)
    return structlog.get_logger()
