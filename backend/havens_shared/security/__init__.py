"""
Security module: passwords, JWT tokens, rate limiting.
"""

from havens_shared.security.password import hash_password, verify_password, verify_pin
from havens_shared.security.auth import sign_jwt, verify_jwt, token_claims
from havens_shared.security.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    "hash_password",
    "verify_password",
    "verify_pin",
    "sign_jwt",
    "verify_jwt",
    "token_claims",
    "limiter",
    "rate_limit_exceeded_handler",
]
