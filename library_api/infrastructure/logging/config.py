"""Environment-aware logging setup.

Configuration by environment:
- Development / local: colored detailed console, optional file
- Staging: structured console plus optional rotating file
- Production: JSON console, noisy third-party loggers quieted
- Testing: everything below ERROR discarded
"""

import contextvars
import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from ..config.settings import EnvironmentOption, Settings, get_settings
from .formatters import get_formatter

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id")


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the correlation id of the request being served.

    Records emitted outside a request get ``"no-correlation"``. An id passed
    explicitly through ``extra`` is kept.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id() or "no-correlation"
        return True


class LevelColorHandler(logging.StreamHandler):
    """stdout handler that colors the level name when attached to a TTY."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self) -> None:
        super().__init__(sys.stdout)
        self.colored = self.stream.isatty() and sys.platform != "win32"

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelname)
        if self.colored and color:
            line = line.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return line


def build_console_handler(format_type: str, level: int, colored: bool = False) -> logging.Handler:
    """Console handler writing ``format_type`` records to stdout."""
    handler: logging.Handler = LevelColorHandler() if colored else logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(get_formatter(format_type))
    return handler


def build_file_handler(settings: Settings, format_type: str = "structured") -> logging.Handler:
    """Rotating file handler at ``LOG_FILE_PATH``; the directory is created if missing."""
    Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        settings.LOG_FILE_PATH,
        maxBytes=settings.LOG_FILE_MAX_SIZE,
        backupCount=settings.LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(get_formatter(format_type))
    return handler


def setup_logging_configuration() -> None:
    """Configure the root logger from the application settings.

    Should be called once during application startup; ``get_logger`` does it
    lazily on first use.
    """
    settings = get_settings()

    logging.getLogger().handlers.clear()

    if settings.ENVIRONMENT == EnvironmentOption.STAGING:
        handlers = _staging_handlers(settings)
    elif settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        handlers = _production_handlers(settings)
    else:
        handlers = _development_handlers(settings)

    root_logger = logging.getLogger()
    correlation_filter = CorrelationIdFilter()
    for handler in handlers:
        handler.addFilter(correlation_filter)
        root_logger.addHandler(handler)

    root_logger.setLevel(settings.LOG_LEVEL_INT)

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        _configure_noisy_loggers()


def _development_handlers(settings: Settings) -> List[logging.Handler]:
    handlers = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT
        handlers.append(build_console_handler("detailed", console_level, colored=True))

    if settings.LOG_FILE_ENABLED:
        handlers.append(build_file_handler(settings))

    return handlers


def _staging_handlers(settings: Settings) -> List[logging.Handler]:
    handlers = []

    if settings.LOG_CONSOLE_ENABLED:
        handlers.append(build_console_handler(settings.LOG_FORMAT, settings.LOG_LEVEL_INT))

    if settings.LOG_FILE_ENABLED:
        handlers.append(build_file_handler(settings))

    return handlers


def _production_handlers(settings: Settings) -> List[logging.Handler]:
    handlers = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT
        handlers.append(build_console_handler("json", console_level))

    if settings.LOG_FILE_ENABLED:
        handlers.append(build_file_handler(settings))

    return handlers


def _configure_noisy_loggers() -> None:
    noisy_loggers = {
        "asyncpg": logging.WARNING,
        "aiosqlite": logging.WARNING,
        "sqlalchemy.engine": logging.WARNING,
        "sqlalchemy.dialects": logging.WARNING,
        "sqlalchemy.pool": logging.WARNING,
        "uvicorn.access": logging.WARNING,
    }

    for logger_name, level in noisy_loggers.items():
        logging.getLogger(logger_name).setLevel(level)


def configure_testing_logging() -> None:
    """Discard everything below ERROR. Called from the test suite."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.ERROR)

    for logger_name in ("sqlalchemy.engine", "aiosqlite", "asyncpg"):
        logging.getLogger(logger_name).setLevel(logging.ERROR)


def set_correlation_id(correlation_id: str) -> contextvars.Token:
    """Bind ``correlation_id`` to the current request context.

    Returns:
        Token for restoring the previous value with ``reset_correlation_id``.
    """
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    correlation_id_var.reset(token)


def get_correlation_id() -> str | None:
    """Get the correlation id of the current request, if any."""
    try:
        return correlation_id_var.get()
    except LookupError:
        return None


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
