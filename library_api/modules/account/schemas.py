"""Pydantic schemas for registration and login."""

from typing import Annotated

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from ...infrastructure.config.settings import settings


class Credentials(BaseModel):
    """Username and password as submitted by a client."""

    username: Annotated[str, Field(max_length=150, description="Account username")]
    password: Annotated[str, Field(max_length=1024, description="Plaintext password")]

    @field_validator("username", "password")
    @classmethod
    def validate_present(cls, v: str, info: ValidationInfo) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v


class RegisterRequest(Credentials):
    """Schema for registering a new account."""

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")
        return v


class LoginRequest(Credentials):
    """Schema for exchanging credentials for a token.

    No length policy is applied here so every wrong password fails the same
    way as an unknown username.
    """

    pass


class RegisterResponse(BaseModel):
    message: str = "User created."


class TokenResponse(BaseModel):
    """Bearer token issued on successful login."""

    token: str = Field(description="Signed JWT, valid for one hour")


class AccountRead(BaseModel):
    id: int
    username: str


class AccountCreateInternal(BaseModel):
    """Row data handed to the store; never exposed through the API."""

    username: str
    password_hash: str
