"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from ....modules.account.schemas import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from ....modules.account.services import AccountService
from ..dependencies import DbSession, get_account_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register Account",
    description="""
    Creates a new account that can log in and manage the catalog.

    - **username**: Unique, non-empty username
    - **password**: At least 6 characters; stored only as a salted hash

    No token is issued at registration; call `/auth/login` afterwards.
    """,
    responses={
        201: {"description": "User created"},
        400: {"description": "Username is already taken or the payload is invalid"},
    },
)
async def register(
    credentials: RegisterRequest,
    db: DbSession,
    account_service: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """Register a new account."""
    await account_service.register(credentials, db)
    return RegisterResponse()


@router.post(
    "/login",
    summary="Log In",
    description="""
    Exchanges a username and password for a signed bearer token.

    The token is valid for one hour and must be sent as
    `Authorization: Bearer <token>` on every catalog request. Unknown
    usernames and wrong passwords produce the same 401 response.
    """,
    responses={
        200: {"description": "Token issued"},
        401: {"description": "Invalid username or password"},
    },
)
async def login(
    credentials: LoginRequest,
    db: DbSession,
    account_service: AccountService = Depends(get_account_service),
) -> TokenResponse:
    """Authenticate and return a bearer token."""
    return await account_service.login(credentials, db)
