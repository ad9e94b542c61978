"""Password hashing and session token primitives."""

from __future__ import annotations

import secrets

import bcrypt

from lions_forum.core.settings import settings

# bcrypt only looks at the first 72 bytes; longer inputs are rejected up front.
MAX_PASSWORD_BYTES = 72
SESSION_TOKEN_BYTES = 32

# Compared against when the login email is unknown. Built at import so the
# first such login costs one checkpw, like a wrong password.
_DUMMY_HASH = bcrypt.hashpw(b"lions-forum", bcrypt.gensalt(rounds=settings.bcrypt_rounds)).decode("utf-8")


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plain text password with a fresh bcrypt salt.

    Args:
        password: Plain text password as submitted by the user.
        rounds: bcrypt log rounds; defaults to ``settings.bcrypt_rounds``.

    Returns:
        The modular-crypt bcrypt hash as text.

    Raises:
        ValueError: If the password is longer than 72 bytes once encoded.
    """
    pwd_bytes = password.encode("utf-8")
    if len(pwd_bytes) > MAX_PASSWORD_BYTES:
        raise ValueError("Password must be at most 72 bytes")
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password=pwd_bytes, salt=salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash in constant time."""
    pwd_bytes = plain_password.encode("utf-8")
    if len(pwd_bytes) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(pwd_bytes, password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


def burn_password_check(plain_password: str) -> None:
    """Spend one bcrypt comparison against a throwaway hash.

    Used when the email is unknown so the login path costs the same as a
    wrong password.
    """
    verify_password(plain_password, _DUMMY_HASH)


def new_session_token() -> str:
    """Return an unguessable URL-safe session token."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
