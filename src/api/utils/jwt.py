from calendar import timegm
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from libs.result import Error, Result, Return
from src.domain.errors import ErrorCode

MIN_SECRET_LENGTH = 32


class MissingSigningSecretError(RuntimeError):
    """Raised at startup when no usable JWT signing secret is configured"""


@dataclass(frozen=True)
class SigningContext:
    """
    Server-held material for signing and verifying session tokens.

    Built once at startup and handed to whatever issues or verifies tokens.
    """

    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_config(cls, config) -> "SigningContext":
        """
        Build the signing context from application config.

        Raises:
            MissingSigningSecretError: JWT_SECRET unset or shorter than 32 chars
        """
        secret = getattr(config, "JWT_SECRET", None)
        if not secret:
            raise MissingSigningSecretError(
                "JWT_SECRET is not configured; refusing to issue session tokens"
            )
        if len(secret) < MIN_SECRET_LENGTH:
            raise MissingSigningSecretError(
                f"JWT_SECRET must be at least {MIN_SECRET_LENGTH} characters"
            )
        return cls(
            secret=secret,
            ttl=timedelta(days=getattr(config, "SESSION_TOKEN_TTL_DAYS", 7)),
        )


def _epoch_seconds(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return timegm(moment.utctimetuple())


def issue_session_token(
    context: SigningContext, user_id: UUID, now: Optional[datetime] = None
) -> str:
    """
    Generate a signed session token

    Args:
        context: Signing context
        user_id: User UUID, stored as the `sub` claim
        now: Issue time (defaults to current UTC time)

    Returns:
        JWT token string (HS256, expires `context.ttl` after issue)
    """
    issued_at = now or datetime.now(UTC)
    if issued_at.tzinfo is None:
        issued_at = issued_at.replace(tzinfo=UTC)
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + context.ttl,
    }
    return jwt.encode(payload, context.secret, algorithm=context.algorithm)


def verify_session_token(
    context: SigningContext, token: str, now: Optional[datetime] = None
) -> Result[str]:
    """
    Verify a session token and return the user id it asserts.

    Signature is checked before expiry. Expiry has no clock-skew leeway:
    the token is honoured while `now <= exp`, compared in whole seconds
    like the `exp` claim itself.

    Args:
        context: Signing context
        token: Encoded JWT
        now: Verification time (defaults to current UTC time)

    Returns:
        Result with the user id string, or Error with one of
        TOKEN_MALFORMED, TOKEN_SIGNATURE_INVALID, TOKEN_EXPIRED
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return Return.err(Error(ErrorCode.TOKEN_MALFORMED, "Token could not be parsed"))

    exp = claims.get("exp")
    if not isinstance(claims.get("sub"), str) or not isinstance(exp, (int, float)):
        return Return.err(Error(ErrorCode.TOKEN_MALFORMED, "Token is missing required claims"))

    try:
        payload = jwt.decode(
            token,
            context.secret,
            algorithms=[context.algorithm],
            options={"require_exp": True, "require_sub": True, "verify_exp": False},
        )
    except JWTError:
        return Return.err(
            Error(ErrorCode.TOKEN_SIGNATURE_INVALID, "Token signature verification failed")
        )

    if _epoch_seconds(now or datetime.now(UTC)) > exp:
        return Return.err(Error(ErrorCode.TOKEN_EXPIRED, "Token has expired"))

    try:
        UUID(payload["sub"])
    except ValueError:
        return Return.err(Error(ErrorCode.TOKEN_MALFORMED, "Token subject is not a user id"))

    return Return.ok(payload["sub"])
