"""
Password hashing for desk users.
Only the bcrypt hash is stored, and the backup carries it unchanged.
"""

import bcrypt

from printshop.core.exceptions import InvalidArgumentError


# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a plain password with a fresh salt."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise InvalidArgumentError(
            f"Password is too long (at most {MAX_PASSWORD_BYTES} bytes)"
        )
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored hash. A malformed hash never matches."""
    encoded = plain_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))
    except ValueError:
        return False
