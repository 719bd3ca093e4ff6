"""
Password and PIN hashing utilities using bcrypt.
"""

import hmac

import bcrypt

from havens_shared.config.logging import get_logger
from havens_shared.utils.exceptions import ValidationError

logger = get_logger(__name__)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Example:
        hashed = hash_password("mypassword123")
        # Returns something like: $2b$12$...
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes", field="password"
        )
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Verify a password against its bcrypt hash.

    Rows without a hash, or with anything that is not a bcrypt hash,
    never verify.
    """
    if not hashed_password:
        return False

    encoded = plain_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False

    if not hashed_password.startswith(_BCRYPT_PREFIXES):
        logger.warning(
            "SECURITY: non-bcrypt password hash found; refusing to verify"
        )
        return False

    return bcrypt.checkpw(encoded, hashed_password.encode("utf-8"))


def verify_pin(supplied_pin: str, stored_pin: str | None) -> bool:
    """Constant-time comparison of an order-verification PIN."""
    if not stored_pin or not supplied_pin:
        return False
    return hmac.compare_digest(supplied_pin.encode("utf-8"), stored_pin.encode("utf-8"))
