"""Utility functions for mapping domain exceptions to HTTP responses."""

from typing import Any, Dict, List, Sequence

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_MAPPING, VALIDATION_FAILED_MESSAGE
from ..exceptions import DomainError

logger = get_logger(__name__)

REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


def map_exception(error: DomainError) -> HTTPException:
    """Map a domain exception to a corresponding HTTP exception."""
    for exception_class, mapper in EXCEPTION_MAPPING.items():
        if isinstance(error, exception_class):
            return mapper(str(error))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected error occurred: {str(error)}"
    )


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] in REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _clean_message(message: str) -> str:
    prefix = "Value error, "
    return message[len(prefix) :] if message.startswith(prefix) else message


def collect_field_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, List[str]]:
    """Group pydantic error dicts into ``{field: [messages]}``."""
    field_errors: Dict[str, List[str]] = {}
    for error in errors:
        field_errors.setdefault(_field_name(error.get("loc", ())), []).append(_clean_message(error.get("msg", "")))
    return field_errors


def validation_error_response(errors: Dict[str, List[str]]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": VALIDATION_FAILED_MESSAGE, "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for domain, request and store errors."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Convert domain exceptions to appropriate HTTP responses."""
        http_exception = map_exception(exc)
        return JSONResponse(
            status_code=http_exception.status_code,
            content={"detail": http_exception.detail},
            headers=http_exception.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report malformed payloads as 400 with field-level messages."""
        return validation_error_response(collect_field_errors(exc.errors()))

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Surface store failures as a generic 500 without leaking details."""
        logger.error(
            f"Database error on {request.method} {request.url.path}: {type(exc).__name__}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
