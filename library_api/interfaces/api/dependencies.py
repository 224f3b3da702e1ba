"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.database import async_session
from ...infrastructure.logging import get_logger
from ...infrastructure.security import TokenValidationError, decode_access_token
from ...modules.account.services import AccountService
from ...modules.book.services import BookService
from ...modules.common.exceptions import InvalidTokenError

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(async_session)]

bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by POST /auth/login")


def get_account_service() -> AccountService:
    """Dependency for providing an AccountService instance."""
    return AccountService()


def get_book_service() -> BookService:
    """Dependency for providing a BookService instance."""
    return BookService()


def get_current_username(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> str:
    """Resolve the username from the ``Authorization: Bearer`` header.

    Runs before the endpoint touches the store. Missing, malformed, expired
    or foreign tokens all fail with the same 401.

    Raises:
        InvalidTokenError: If no valid token was supplied.
    """
    if credentials is None:
        raise InvalidTokenError()

    try:
        return decode_access_token(credentials.credentials)
    except TokenValidationError as e:
        logger.debug(f"Rejected bearer token: {e}")
        raise InvalidTokenError()
