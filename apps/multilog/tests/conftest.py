import pytest

from multilog import core
from multilog.config.logging import LogLevel
from multilog.destinations import Destination


class RecordingDestination(Destination):
    """Destination that remembers every call it receives."""

    def __init__(self, name: str = "recorder", journal: list | None = None):
        self.name = name
        self.journal = journal if journal is not None else []
        self.closed = False

    def debug_log(self, message: str) -> None:
        self.journal.append((self.name, LogLevel.DEBUG, message))

    def info_log(self, message: str) -> None:
        self.journal.append((self.name, LogLevel.INFO, message))

    def error_log(self, message: str) -> None:
        self.journal.append((self.name, LogLevel.ERROR, message))

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def reset_process_logger():
    """
    Ensures every test starts and ends without an installed logger.
    """
    previous = core.get_logger()
    core.set_logger(None)
    yield
    installed = core.get_logger()
    core.set_logger(previous)
    if installed is not None and installed is not previous:
        installed.close()


@pytest.fixture
def recorder_factory() -> type[RecordingDestination]:
    return RecordingDestination


@pytest.fixture
def recorder() -> RecordingDestination:
    return RecordingDestination()


@pytest.fixture
def installed_recorder(recorder: RecordingDestination) -> RecordingDestination:
    core.set_logger(recorder)
    return recorder


@pytest.fixture(autouse=True)
def clean_logging_env(monkeypatch):
    """Keep host environment variables out of LoggingSettings."""
    for key in ("MULTILOG_LOG_LEVEL", "MULTILOG_LOG_OUTPUT", "MULTILOG_LOG_SYSLOG_IDENT"):
        monkeypatch.delenv(key, raising=False)
