"""Logger factory that configures logging on first use.

Modules obtain loggers through ``get_logger(__name__)``; the first call
applies the environment-aware configuration from ``config``.
"""

import logging
from threading import Lock
from typing import Optional

from ..config.settings import get_settings
from .config import setup_logging_configuration

_logging_configured = False
_configuration_lock = Lock()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger, configuring the logging system if needed.

    Args:
        name: Logger name, typically ``__name__``. Defaults to the package name.

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Book created", extra={"book_id": 42})
        ```
    """
    _ensure_logging_configured()

    return logging.getLogger(name or "library_api")


def configure_logging(force: bool = False) -> None:
    """Apply the logging configuration once (or again with ``force``)."""
    global _logging_configured

    with _configuration_lock:
        if _logging_configured and not force:
            return

        setup_logging_configuration()
        _logging_configured = True

        settings = get_settings()
        logging.getLogger(__name__).info(
            f"Logging configured for {settings.ENVIRONMENT.value} environment",
            extra={
                "log_level": settings.LOG_LEVEL,
                "log_format": settings.LOG_FORMAT,
                "console_enabled": settings.LOG_CONSOLE_ENABLED,
                "file_enabled": settings.LOG_FILE_ENABLED,
            },
        )


def mark_logging_configured() -> None:
    """Skip automatic configuration, e.g. after ``configure_testing_logging``."""
    global _logging_configured

    with _configuration_lock:
        _logging_configured = True


def _ensure_logging_configured() -> None:
    if not _logging_configured:
        configure_logging()
