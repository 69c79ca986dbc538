"""
Log destination abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from typing import IO, Iterable, Sequence

from multilog.config.logging import LogLevel
from multilog.formatters import tag_line

# =============================================================================
# Destination Abstraction (Strategy Pattern)
# =============================================================================


class Destination(ABC):
    """Abstract base class for log destinations."""

    @abstractmethod
    def debug_log(self, message: str) -> None: ...

    @abstractmethod
    def info_log(self, message: str) -> None: ...

    @abstractmethod
    def error_log(self, message: str) -> None: ...

    def log(self, level: LogLevel, message: str) -> None:
        """Dispatch `message` to the method matching `level`."""
        if level is LogLevel.DEBUG:
            self.debug_log(message)
        elif level is LogLevel.INFO:
            self.info_log(message)
        else:
            self.error_log(message)

    def close(self) -> None:
        """Release resources held by the destination."""


class CompositeLogger(Destination):
    """Fans every message out to a fixed, ordered set of destinations."""

    def __init__(self, destinations: Iterable[Destination]):
        self._destinations: tuple[Destination, ...] = tuple(destinations)

    @property
    def destinations(self) -> tuple[Destination, ...]:
        return self._destinations

    def _fan_out(self, level: LogLevel, message: str) -> None:
        for destination in self._destinations:
            try:
                destination.log(level, message)
            except Exception:
                pass  # One failing destination must not starve the others

    def debug_log(self, message: str) -> None:
        self._fan_out(LogLevel.DEBUG, message)

    def info_log(self, message: str) -> None:
        self._fan_out(LogLevel.INFO, message)

    def error_log(self, message: str) -> None:
        self._fan_out(LogLevel.ERROR, message)

    def close(self) -> None:
        for destination in self._destinations:
            try:
                destination.close()
            except Exception:
                pass


class ConsoleDestination(Destination):
    """Error-only console output on standard error.

    To see debug or info messages on screen, configure ``stdout`` as a log
    output instead; it goes through FileDestination.
    """

    def debug_log(self, message: str) -> None:
        pass

    def info_log(self, message: str) -> None:
        pass

    def error_log(self, message: str) -> None:
        # Resolved per call so redirected stderr is honoured
        stream = sys.stderr
        try:
            stream.write(f"Error: {message}\n")
            stream.flush()
        except (OSError, ValueError):
            pass


class FileDestination(Destination):
    """Writes tagged lines to named files and pre-opened streams.

    Files are truncated once at construction. Debug lines are only written;
    info and error lines are written and then every named file is closed
    and reopened in append mode, so the line is on disk when the call
    returns. Streams are flushed, never closed. Files that cannot be opened
    are dropped for good.
    """

    def __init__(
        self,
        level: LogLevel,
        filenames: Sequence[str] = (),
        streams: Sequence[IO[str]] = (),
        *,
        encoding: str = "utf-8",
    ):
        self._level = level
        self._encoding = encoding
        self._filenames: list[str] = list(dict.fromkeys(filenames))
        self._streams: list[IO[str]] = list({id(s): s for s in streams}.values())
        self._files: dict[str, IO[str]] = {}
        self._lock = threading.Lock()
        with self._lock:
            self._reopen_files("w")

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def filenames(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._filenames)

    @property
    def streams(self) -> tuple[IO[str], ...]:
        return tuple(self._streams)

    def debug_log(self, message: str) -> None:
        if not self._level.permits(LogLevel.DEBUG):
            return
        # Debug output is copious, so it is not forced to disk
        with self._lock:
            line = tag_line(LogLevel.DEBUG, message)
            self._write(line)

    def info_log(self, message: str) -> None:
        if not self._level.permits(LogLevel.INFO):
            return
        with self._lock:
            line = tag_line(LogLevel.INFO, message)
            self._write(line)
            self._commit()

    def error_log(self, message: str) -> None:
        if not self._level.permits(LogLevel.ERROR):
            return
        with self._lock:
            line = tag_line(LogLevel.ERROR, message)
            self._write(line)
            self._commit()

    def close(self) -> None:
        with self._lock:
            self._close_files()
            self._filenames.clear()

    # -------------------------------------------------------------------------
    # Internals (caller holds the lock)
    # -------------------------------------------------------------------------

    def _write(self, line: str) -> None:
        for handle in self._files.values():
            try:
                handle.write(line)
            except (OSError, ValueError):
                pass
        for stream in self._streams:
            try:
                stream.write(line)
            except (OSError, ValueError):
                pass

    def _commit(self) -> None:
        self._reopen_files("a")
        for stream in self._streams:
            try:
                stream.flush()
            except (OSError, ValueError):
                pass

    def _close_files(self) -> None:
        for handle in self._files.values():
            try:
                handle.close()
            except OSError:
                pass
        self._files.clear()

    def _reopen_files(self, mode: str) -> None:
        self._close_files()
        for filename in list(self._filenames):
            try:
                self._files[filename] = open(filename, mode, encoding=self._encoding)
            except (OSError, ValueError):
                self._filenames.remove(filename)


class SystemDestination(Destination):
    """Forwards messages to the host system log.

    POSIX hosts use syslog; Windows hosts use the debugger output channel.
    """

    def __init__(self, level: LogLevel, *, ident: str | None = None, facility: int | None = None):
        self._level = level
        self._opened = False
        self._windows = sys.platform == "win32"
        if not self._windows:
            import syslog

            self._syslog = syslog
            self._priorities = {
                LogLevel.DEBUG: syslog.LOG_DEBUG,
                LogLevel.INFO: syslog.LOG_INFO,
                LogLevel.ERROR: syslog.LOG_ERR,
            }
            if ident is not None:
                facility = syslog.LOG_USER if facility is None else facility
                syslog.openlog(ident, syslog.LOG_PID, facility)
                self._opened = True

    @property
    def level(self) -> LogLevel:
        return self._level

    def debug_log(self, message: str) -> None:
        if self._level.permits(LogLevel.DEBUG):
            self._emit(LogLevel.DEBUG, tag_line(LogLevel.DEBUG, message, newline=False))

    def info_log(self, message: str) -> None:
        if self._level.permits(LogLevel.INFO):
            self._emit(LogLevel.INFO, tag_line(LogLevel.INFO, message))

    def error_log(self, message: str) -> None:
        if self._level.permits(LogLevel.ERROR):
            self._emit(LogLevel.ERROR, tag_line(LogLevel.ERROR, message))

    def _emit(self, level: LogLevel, text: str) -> None:
        try:
            if self._windows:
                import ctypes

                ctypes.windll.kernel32.OutputDebugStringW(text)
            else:
                self._syslog.syslog(self._priorities[level], text)
        except (OSError, ValueError):
            pass

    def close(self) -> None:
        if self._opened:
            self._syslog.closelog()
            self._opened = False
