"""Credential service: account registration and token issuance."""

from datetime import datetime
from typing import Optional, cast

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.logging import get_logger
from ...infrastructure.security import create_access_token, get_password_hash, verify_password
from ..common.exceptions import InvalidCredentialsError, UsernameTakenError
from .crud import account_crud
from .schemas import AccountCreateInternal, AccountRead, LoginRequest, RegisterRequest, TokenResponse

logger = get_logger(__name__)


class AccountService:
    """Service for registering accounts and authenticating them.

    Registration checks for an existing username before inserting; the
    UNIQUE constraint on ``accounts.username`` settles the race between two
    concurrent registrations of the same name, and its violation is reported
    the same way as the pre-check.
    """

    async def register(self, credentials: RegisterRequest, db: AsyncSession) -> AccountRead:
        """Create an account with a bcrypt-hashed password.

        Args:
            credentials: Validated username and password
            db: Database session

        Returns:
            The new account's id and username

        Raises:
            UsernameTakenError: If the username is already registered.
        """
        if await account_crud.exists(db=db, username=credentials.username):
            logger.info("Registration rejected: username taken")
            raise UsernameTakenError(credentials.username)

        account_internal = AccountCreateInternal(
            username=credentials.username,
            password_hash=get_password_hash(credentials.password),
        )

        try:
            created_account = cast(
                AccountRead,
                await account_crud.create(
                    db=db, object=account_internal, schema_to_select=AccountRead, return_as_model=True
                ),
            )
        except IntegrityError:
            await db.rollback()
            logger.info("Registration rejected: username taken concurrently")
            raise UsernameTakenError(credentials.username)

        logger.info("Account registered", extra={"account_id": created_account.id})
        return created_account

    async def login(
        self,
        credentials: LoginRequest,
        db: AsyncSession,
        now: Optional[datetime] = None,
    ) -> TokenResponse:
        """Verify credentials and issue a one-hour bearer token.

        Unknown usernames and wrong passwords raise the same error.

        Raises:
            InvalidCredentialsError: If the credentials do not match an account.
        """
        account = await account_crud.get(db=db, username=credentials.username)

        if account is None or not verify_password(credentials.password, account["password_hash"]):
            logger.info("Login failed")
            raise InvalidCredentialsError()

        token = create_access_token(subject=account["username"], now=now)
        logger.info("Login succeeded", extra={"account_id": account["id"]})
        return TokenResponse(token=token)
