# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the structured JSON logger.

We verify:
  - output is valid JSON on stderr, and stdout stays clean
  - all mandatory fields are present (ts, level, module, msg)
  - log levels filter correctly
  - extra context fields get merged into the JSON
"""

import json
import logging
from pathlib import Path

import pytest

from sbpack.logging.logger import get_logger, set_package_log_level


@pytest.fixture(autouse=True)
def _reset_loggers() -> None:
    """
    Drop test logger handlers and every attached log file between tests, so
    get_logger's handler-stacking guard and open files do not leak across
    tests.
    """
    yield  # type: ignore[misc]
    for name in list(logging.Logger.manager.loggerDict):
        if not name.startswith("sbpack"):
            continue
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if name.startswith("sbpack.test") or isinstance(handler, logging.FileHandler):
                logger.removeHandler(handler)
                handler.close()


class TestJsonOutput:
    def test_output_is_valid_json_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("sbpack.test.json", log_level="INFO")
        logger.info("hello")
        captured = capsys.readouterr()

        assert captured.out == ""
        parsed = json.loads(captured.err.strip())
        assert isinstance(parsed, dict)

    def test_mandatory_fields_are_present(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("sbpack.test.fields", log_level="INFO")
        logger.info("test message")
        captured = capsys.readouterr()

        parsed = json.loads(captured.err.strip())
        assert "ts" in parsed
        assert parsed["level"] == "INFO"
        assert parsed["module"] == "sbpack.test.fields"
        assert parsed["msg"] == "test message"

    def test_extra_fields_are_included(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("sbpack.test.extra", log_level="DEBUG")
        logger.info("staged", extra={"source": "target/release/x.a", "count": 3})
        captured = capsys.readouterr()

        parsed = json.loads(captured.err.strip())
        assert parsed["source"] == "target/release/x.a"
        assert parsed["count"] == 3

    def test_exception_info_is_serialized(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("sbpack.test.exc", log_level="INFO")
        try:
            raise OSError("disk full")
        except OSError:
            logger.error("write failed", exc_info=True)
        captured = capsys.readouterr()

        parsed = json.loads(captured.err.strip())
        assert "disk full" in parsed["exc"]


class TestLogLevelFiltering:
    def test_debug_messages_hidden_at_info_level(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("sbpack.test.level_filter", log_level="INFO")
        logger.debug("this should not appear")
        captured = capsys.readouterr()
        assert captured.err.strip() == ""

    def test_info_messages_shown_at_info_level(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("sbpack.test.level_show", log_level="INFO")
        logger.info("this should appear")
        captured = capsys.readouterr()
        assert "this should appear" in captured.err

    def test_set_package_log_level_applies_to_existing_loggers(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("sbpack.test.package_level", log_level="INFO")
        set_package_log_level("ERROR")
        logger.warning("suppressed")
        captured = capsys.readouterr()
        assert captured.err.strip() == ""
        set_package_log_level("INFO")


class TestFileOutput:
    def test_logs_are_written_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "test.log"
        logger = get_logger("sbpack.test.file_output", log_level="INFO", log_file=log_file)
        logger.info("file log test")

        assert log_file.exists()
        content = log_file.read_text(encoding="utf-8")
        parsed = json.loads(content.strip())
        assert parsed["msg"] == "file log test"


class TestInvalidLogLevel:
    def test_invalid_level_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            get_logger("sbpack.test.invalid", log_level="INVALID")


class TestPackageLogFile:
    def test_set_package_log_level_attaches_file_to_existing_loggers(
        self, tmp_path: Path
    ) -> None:
        log_file = tmp_path / "package.log"
        first = get_logger("sbpack.test.pkg_file_a", log_level="INFO")
        second = get_logger("sbpack.test.pkg_file_b", log_level="INFO")

        set_package_log_level("INFO", log_file=log_file)
        first.info("from a")
        second.info("from b")

        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert {r["module"] for r in records} == {"sbpack.test.pkg_file_a", "sbpack.test.pkg_file_b"}

    def test_repeated_attach_does_not_duplicate_lines(self, tmp_path: Path) -> None:
        log_file = tmp_path / "package.log"
        logger = get_logger("sbpack.test.pkg_file_once", log_level="INFO", log_file=log_file)

        set_package_log_level("INFO", log_file=log_file)
        get_logger("sbpack.test.pkg_file_once", log_level="INFO", log_file=log_file)
        logger.info("once")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
