"""
Credential custody

Password hashing (bcrypt) and password reset token generation and hashing
(SHA-256). Raw secrets pass through here and are never stored.
"""

import hashlib
import hmac
import secrets
from datetime import datetime
from typing import Optional

import bcrypt

from src.domain.entities import User

BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

RESET_TOKEN_BYTES = 32


def hash_password(plaintext: str) -> str:
    """
    Hash a password with bcrypt (cost factor 12).

    A fresh salt is generated per call and embedded in the output.
    Errors propagate to the caller; a failed hash is never retried.

    Raises:
        ValueError: empty password, or input bcrypt refuses
    """
    if not plaintext:
        raise ValueError("Cannot hash an empty password")
    password_hash = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS))
    return password_hash.decode("utf-8")


def verify_password(plaintext: str, password_hash: str) -> bool:
    """
    Check a candidate password against a stored bcrypt hash.

    Returns False on mismatch. Candidates longer than bcrypt's input limit
    can never have been stored, so they do not match.
    """
    candidate = plaintext.encode("utf-8")
    if not candidate or len(candidate) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))


def burn_password_check() -> None:
    """Spend the time of one bcrypt check, for unknown-account paths."""
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))


def generate_reset_token() -> str:
    """32 random bytes (256 bits), URL-safe base64"""
    return secrets.token_urlsafe(RESET_TOKEN_BYTES)


def hash_reset_token(raw_token: str) -> str:
    """SHA-256 hex digest; deterministic so a presented token can be matched"""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def reset_token_matches(user: Optional[User], token_hash: str) -> bool:
    """Stored reset token hash equals token_hash (constant-time compare)"""
    if user is None or user.reset_token_hash is None:
        return False
    return hmac.compare_digest(user.reset_token_hash, token_hash)


def reset_token_unexpired(user: User, now: datetime) -> bool:
    """Expiry is exclusive: the token is dead at exactly reset_token_expires_at"""
    return user.reset_token_expires_at is not None and now < user.reset_token_expires_at
