"""
Password strength policy, applied before any password is hashed.
"""

import re

from libs.result import Error, Result, Return
from src.app.services.credentials import BCRYPT_MAX_BYTES
from src.domain.errors import ErrorCode

MIN_PASSWORD_LENGTH = 8

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")


def validate_password_strength(password: str) -> Result[None]:
    """
    Validate password complexity.

    Rules:
    - at least 8 characters
    - at most 72 bytes once UTF-8 encoded
    - at least one lowercase letter, one uppercase letter and one digit

    Returns:
        Result with None if valid, or Error(WEAK_PASSWORD)
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                ErrorCode.WEAK_PASSWORD,
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )

    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return Return.err(
            Error(
                ErrorCode.WEAK_PASSWORD,
                f"Password must be at most {BCRYPT_MAX_BYTES} bytes long",
            )
        )

    if not (_LOWER.search(password) and _UPPER.search(password) and _DIGIT.search(password)):
        return Return.err(
            Error(
                ErrorCode.WEAK_PASSWORD,
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number",
            )
        )

    return Return.ok(None)
