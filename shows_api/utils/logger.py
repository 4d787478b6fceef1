"""Application logging.

Modules obtain their logger from ``setup_logger``. Records go to stdout
and, unless LOG_DIR is empty, to a single ``shows_api.log`` per log
directory, rotated at midnight and shared by every logger.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from shows_api.settings import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILENAME = "shows_api.log"
_BACKUP_DAYS = 14

_LOGGERS_CACHE: dict[str, logging.Logger] = {}
_FILE_HANDLERS: dict[Path, TimedRotatingFileHandler] = {}


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Return the configured logger for ``name``.

    Loggers are built once and cached; later calls ignore their arguments.

    Args:
        name: Logger name, usually the module path.
        level: Logging level. Defaults to LOG_LEVEL.
        log_dir: Directory of the log file. Defaults to LOG_DIR.

    Returns:
        Logger writing to stdout and, when enabled, the shared log file.
    """
    cached = _LOGGERS_CACHE.get(name)
    if cached is not None:
        return cached

    logger = logging.getLogger(name)
    logger.setLevel(settings.logging.level if level is None else level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    logger.addHandler(_create_console_handler(formatter))

    directory = _resolve_log_dir(log_dir)
    if directory is not None:
        file_handler = _shared_file_handler(directory, formatter)
        if file_handler is not None:
            logger.addHandler(file_handler)

    _LOGGERS_CACHE[name] = logger
    return logger


def _resolve_log_dir(log_dir: Path | None) -> Path | None:
    """Explicit directory, else LOG_DIR; None when file logging is off."""
    if log_dir is not None:
        return Path(log_dir)
    if not settings.logging.log_dir:
        return None
    return Path(settings.logging.log_dir)


def _create_console_handler(formatter: logging.Formatter) -> logging.StreamHandler:
    """Stdout handler. Filtering is left to the logger level."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    return handler


def _shared_file_handler(
    log_dir: Path,
    formatter: logging.Formatter,
) -> TimedRotatingFileHandler | None:
    """Return the rotating handler of ``log_dir``, creating it on first use.

    Args:
        log_dir: Directory holding ``shows_api.log``.
        formatter: Formatter applied when the handler is created.

    Returns:
        Shared handler, or None if the file cannot be opened.
    """
    key = log_dir.resolve()
    handler = _FILE_HANDLERS.get(key)
    if handler is not None:
        return handler

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = TimedRotatingFileHandler(
            log_dir / _LOG_FILENAME,
            when="midnight",
            backupCount=_BACKUP_DAYS,
            encoding="utf-8",
        )
    except OSError as e:
        print(f"Warning: Could not create log file in {log_dir}: {e}", file=sys.stderr)
        return None

    handler.setFormatter(formatter)
    _FILE_HANDLERS[key] = handler
    return handler
