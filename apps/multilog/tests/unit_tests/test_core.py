"""
Unit tests for the process-wide handle, the free functions and the factory.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from multilog import core
from multilog.config.logging import LoggingSettings, LogLevel
from multilog.core import (
    FAIL,
    OKAY,
    configure_logging,
    create_logger,
    debug_log,
    error_log,
    get_logger,
    info_log,
    parse_outputs,
    set_logger,
    shutdown_logging,
)
from multilog.destinations import (
    CompositeLogger,
    ConsoleDestination,
    FileDestination,
    SystemDestination,
)


class TestProcessWideHandle:
    def test_unset_by_default(self) -> None:
        assert get_logger() is None

    def test_set_and_get(self, recorder) -> None:
        set_logger(recorder)
        assert get_logger() is recorder
        set_logger(None)
        assert get_logger() is None

    def test_absent_logger_is_a_no_op(self, capsys) -> None:
        assert debug_log("x") is None
        assert info_log("x") is None
        assert error_log("x") is FAIL
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_free_functions_format_and_forward(self, installed_recorder) -> None:
        debug_log("frame %d", 1)
        info_log("game %s", "scud")
        result = error_log("rom %s missing", "epr-1234")

        assert result is FAIL
        assert installed_recorder.journal == [
            ("recorder", LogLevel.DEBUG, "frame 1"),
            ("recorder", LogLevel.INFO, "game scud"),
            ("recorder", LogLevel.ERROR, "rom epr-1234 missing"),
        ]

    def test_error_log_return_idiom(self, installed_recorder) -> None:
        def load() -> bool:
            return error_log("could not load")

        assert load() is FAIL
        assert OKAY is not FAIL


class TestParseOutputs:
    def test_keywords_are_case_folded_filenames_are_not(self) -> None:
        destinations, filenames = parse_outputs("stdout, MyFile.txt, SYSLOG")
        assert destinations == ["stdout", "syslog"]
        assert filenames == ["MyFile.txt"]

    def test_duplicates_collapse(self) -> None:
        destinations, filenames = parse_outputs("a.log,stderr, a.log ,STDERR,b.log")
        assert destinations == ["stderr"]
        assert filenames == ["a.log", "b.log"]

    def test_empty_tokens_ignored(self) -> None:
        assert parse_outputs("") == ([], [])
        assert parse_outputs(" , ,") == ([], [])


class TestCreateLogger:
    """Factory wiring"""

    def test_defaults_give_console_only(self) -> None:
        logger = create_logger({})
        assert isinstance(logger, CompositeLogger)
        assert [type(d) for d in logger.destinations] == [ConsoleDestination]

    def test_non_string_level_fails_without_raising(self, installed_recorder) -> None:
        assert create_logger({"LogLevel": 3}) is None
        assert installed_recorder.journal == [
            ("recorder", LogLevel.ERROR, "Invalid log level: 3"),
        ]

    def test_file_name_with_nul_is_skipped(self, tmp_path: Path) -> None:
        good = tmp_path / "ok.log"
        logger = create_logger({"LogOutput": f"{good}, bad\x00name"})
        _, file_destination = logger.destinations
        assert file_destination.filenames == (str(good),)
        logger.close()

    def test_overflowing_arguments_reach_destinations(self, installed_recorder) -> None:
        assert error_log("code %c", 0x110000) is FAIL
        info_log("frames %d", float("inf"))
        assert installed_recorder.journal == [
            ("recorder", LogLevel.ERROR, f"code %c {0x110000}"),
            ("recorder", LogLevel.INFO, "frames %d inf"),
        ]

    def test_invalid_level_fails(self, installed_recorder) -> None:
        assert create_logger({"LogLevel": "bogus", "LogOutput": "stdout"}) is None
        assert installed_recorder.journal == [
            ("recorder", LogLevel.ERROR, "Invalid log level: bogus"),
        ]

    @pytest.mark.skipif(sys.platform == "win32", reason="syslog is POSIX only")
    def test_mixed_outputs(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        logger = create_logger({"LogLevel": "DEBUG", "LogOutput": "stdout, MyFile.txt, SYSLOG"})

        console, file_destination, system_destination = logger.destinations
        assert isinstance(console, ConsoleDestination)
        assert isinstance(file_destination, FileDestination)
        assert isinstance(system_destination, SystemDestination)
        assert file_destination.filenames == ("MyFile.txt",)
        assert file_destination.streams == (sys.stdout,)
        assert file_destination.level is LogLevel.DEBUG
        assert system_destination.level is LogLevel.DEBUG
        assert (tmp_path / "MyFile.txt").exists()
        logger.close()

    def test_stream_order_is_stdout_then_stderr(self) -> None:
        logger = create_logger({"LogOutput": "stderr,stdout,Stdout"})
        _, file_destination = logger.destinations
        assert file_destination.streams == (sys.stdout, sys.stderr)
        assert file_destination.filenames == ()
        assert file_destination.level is LogLevel.INFO

    def test_duplicate_files_written_once(self, tmp_path: Path) -> None:
        path = tmp_path / "dup.log"
        logger = create_logger({"LogLevel": "info", "LogOutput": f"{path}, {path} ,{path}"})

        _, file_destination = logger.destinations
        assert file_destination.filenames == (str(path),)

        logger.info_log("once")
        assert path.read_text(encoding="utf-8") == "[Info] once\n"
        logger.close()

    def test_accepts_logging_settings(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.log"
        logger = create_logger(LoggingSettings(level="error", output=str(path)))
        _, file_destination = logger.destinations
        assert file_destination.level is LogLevel.ERROR
        logger.close()


class TestLifecycle:
    def test_configure_installs_logger(self, tmp_path: Path) -> None:
        path = tmp_path / "app.log"
        assert configure_logging({"LogLevel": "all", "LogOutput": str(path)}) is OKAY

        debug_log("starting %s", "up")
        info_log("ready")
        assert path.read_text(encoding="utf-8") == "[Debug] starting up\n[Info] ready\n"

    def test_configure_failure_keeps_previous_logger(self, installed_recorder) -> None:
        assert configure_logging({"LogLevel": "loud"}) is FAIL
        assert get_logger() is installed_recorder

    def test_reconfigure_closes_previous_logger(self, installed_recorder) -> None:
        assert configure_logging({}) is OKAY
        assert installed_recorder.closed
        assert get_logger() is not installed_recorder

    def test_shutdown_uninstalls_and_closes(self, installed_recorder) -> None:
        shutdown_logging()
        assert get_logger() is None
        assert installed_recorder.closed
        shutdown_logging()

    def test_configure_defaults_to_settings(self, monkeypatch) -> None:
        from multilog.config import settings

        seen: list = []
        monkeypatch.setattr(core, "create_logger", lambda config: seen.append(config))
        assert configure_logging() is FAIL
        assert seen == [None]

        assert core._as_settings(None) is settings.logging
