"""Centralized logging for the library catalog.

Usage:
    ```python
    from library_api.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Book created", extra={"book_id": 42})
    ```
"""

from .config import (
    configure_testing_logging,
    get_correlation_id,
    set_correlation_id,
    setup_logging_configuration,
)
from .factory import configure_logging, get_logger, mark_logging_configured
from .middleware import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "configure_logging",
    "configure_testing_logging",
    "get_correlation_id",
    "get_logger",
    "mark_logging_configured",
    "set_correlation_id",
    "setup_logging_configuration",
]
