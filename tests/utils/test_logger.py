"""Unit tests for logger setup."""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from shows_api.utils.logger import (
    _LOGGERS_CACHE,
    _create_console_handler,
    _resolve_log_dir,
    _shared_file_handler,
    setup_logger,
)


def _file_handlers(logger: logging.Logger) -> list[TimedRotatingFileHandler]:
    return [h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler)]


class TestSetupLogger:
    @staticmethod
    def test_returns_named_logger(tmp_path: Path) -> None:
        logger = setup_logger("test.logger.unique1", log_dir=tmp_path)
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.logger.unique1"
        assert logger.propagate is False

    @staticmethod
    def test_level_set(tmp_path: Path) -> None:
        logger = setup_logger("test.logger.unique2", level=logging.DEBUG, log_dir=tmp_path)
        assert logger.level == logging.DEBUG

    @staticmethod
    def test_level_defaults_to_settings() -> None:
        logger = setup_logger("test.logger.unique3", log_dir=None)
        assert logging.getLevelName(logger.level) in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    @staticmethod
    def test_cache_returns_same_instance(tmp_path: Path) -> None:
        logger1 = setup_logger("test.logger.cached", log_dir=tmp_path)
        logger2 = setup_logger("test.logger.cached", level=logging.ERROR)
        assert logger1 is logger2
        assert logger2.level != logging.ERROR
        assert "test.logger.cached" in _LOGGERS_CACHE

    @staticmethod
    def test_loggers_share_one_file(tmp_path: Path) -> None:
        first = setup_logger("test.logger.shared_a", level="INFO", log_dir=tmp_path)
        second = setup_logger("test.logger.shared_b", level="INFO", log_dir=tmp_path)
        assert _file_handlers(first)[0] is _file_handlers(second)[0]

        first.info("stored image")
        second.warning("show not found")
        _file_handlers(first)[0].flush()

        content = (tmp_path / "shows_api.log").read_text(encoding="utf-8")
        assert "test.logger.shared_a | stored image" in content
        assert "WARNING  | test.logger.shared_b" in content


class TestResolveLogDir:
    @staticmethod
    def test_explicit_dir_wins(tmp_path: Path) -> None:
        assert _resolve_log_dir(tmp_path) == tmp_path


class TestCreateConsoleHandler:
    @staticmethod
    def test_returns_stream_handler() -> None:
        formatter = logging.Formatter("%(message)s")
        handler = _create_console_handler(formatter)
        assert type(handler) is logging.StreamHandler
        assert handler.formatter is formatter


class TestSharedFileHandler:
    @staticmethod
    def test_rotates_at_midnight(tmp_path: Path) -> None:
        handler = _shared_file_handler(tmp_path / "logs", logging.Formatter("%(message)s"))
        assert handler is not None
        assert handler.when == "MIDNIGHT"
        assert Path(handler.baseFilename).name == "shows_api.log"
        assert (tmp_path / "logs").is_dir()

    @staticmethod
    def test_unwritable_dir_returns_none(tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        formatter = logging.Formatter("%(message)s")
        assert _shared_file_handler(blocker / "logs", formatter) is None
