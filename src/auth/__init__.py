"""Password hashing for back-office users"""

from .security import PasswordError, hash_password, verify_password

__all__ = ["PasswordError", "hash_password", "verify_password"]
