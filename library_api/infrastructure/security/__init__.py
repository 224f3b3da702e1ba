from .passwords import get_password_hash, verify_password
from .tokens import TokenValidationError, create_access_token, decode_access_token

__all__ = [
    "TokenValidationError",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
