"""Password hashing helpers backed by bcrypt."""

import bcrypt

from ..config.settings import settings

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str, rounds: int | None = None) -> str:
    """Derive a salted bcrypt hash for ``password``.

    Args:
        password: Plaintext password.
        rounds: bcrypt cost factor, defaults to ``settings.BCRYPT_ROUNDS``.

    Returns:
        The hash as a UTF-8 string suitable for a text column.
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored bcrypt hash.

    A malformed stored hash verifies as ``False`` rather than raising.
    """
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        return False
