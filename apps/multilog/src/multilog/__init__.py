"""
Multilog: process-wide, multi-destination logging.

Routes leveled messages to any combination of:
- console: error messages on standard error (always present)
- files / stdout / stderr: tagged lines, durably written for info and error
- syslog: the host system log

Design Pattern: Strategy Pattern for destinations, Composite for fan-out.
"""

from .config.logging import LogLevel
from .core import (
    FAIL,
    OKAY,
    configure_logging,
    create_logger,
    debug_log,
    error_log,
    get_logger,
    info_log,
    set_logger,
    shutdown_logging,
)
from .destinations import (
    CompositeLogger,
    ConsoleDestination,
    Destination,
    FileDestination,
    SystemDestination,
)
from .formatters import MAX_LOG_LENGTH

__all__ = [
    "LogLevel",
    "MAX_LOG_LENGTH",
    "OKAY",
    "FAIL",
    "Destination",
    "CompositeLogger",
    "ConsoleDestination",
    "FileDestination",
    "SystemDestination",
    "get_logger",
    "set_logger",
    "debug_log",
    "info_log",
    "error_log",
    "create_logger",
    "configure_logging",
    "shutdown_logging",
]
