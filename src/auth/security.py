"""
Password hashing helpers.

Responsibility: bcrypt hashing and verification of user passwords
"""

from typing import Optional

import bcrypt

from ..config import settings

# bcrypt ignores input beyond 72 bytes; longer passwords are rejected
MAX_PASSWORD_BYTES = 72


class PasswordError(ValueError):
    pass


def hash_password(plain_password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        plain_password: Password as typed by the user
        rounds: Cost factor (defaults to settings.app.bcrypt_rounds)

    Returns:
        The bcrypt hash as text
    """
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise PasswordError("Password is empty")
    if len(password) > MAX_PASSWORD_BYTES:
        raise PasswordError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")

    salt = bcrypt.gensalt(rounds=rounds or settings.app.bcrypt_rounds)
    return bcrypt.hashpw(password, salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    if not password or not password_hash or len(password) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password, password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
