"""
Exceptions raised by the multilog package.

Logging calls themselves never raise; these are only surfaced by helpers
that validate configuration eagerly.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class MultilogError(Exception):
    """Root of all multilog exceptions."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class LoggingConfigError(MultilogError):
    """Raised when a logging setting cannot be interpreted."""

    def __init__(self, *, key: str, value: Any) -> None:
        super().__init__(
            f"Invalid value for {key}: {value!r}",
            code="INVALID_LOGGING_CONFIG",
            details={"key": key, "value": value},
        )
