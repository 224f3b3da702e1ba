"""Common constants used across the application."""

from typing import Callable, Dict, Type

from fastapi import HTTPException, status

from .exceptions import (
    AuthenticationError,
    DomainError,
    ResourceExistsError,
    ResourceNotFoundError,
)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}

EXCEPTION_MAPPING: Dict[Type[DomainError], Callable[[str], HTTPException]] = {
    ResourceNotFoundError: lambda message: HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message),
    ResourceExistsError: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
    AuthenticationError: lambda message: HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED, detail=message, headers=BEARER_CHALLENGE
    ),
}

VALIDATION_FAILED_MESSAGE = "One or more validation errors occurred."
