"""
Unit tests for session token issue and verification
"""
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from src.api.utils.jwt import (
    MissingSigningSecretError,
    SigningContext,
    issue_session_token,
    verify_session_token,
)
from src.domain.errors import ErrorCode


def test_round_trip_returns_user_id(signing_context):
    user_id = uuid4()

    result = verify_session_token(signing_context, issue_session_token(signing_context, user_id))

    assert result.is_ok()
    assert result.value == str(user_id)


def test_token_lifetime_is_seven_days(signing_context):
    issued = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    token = issue_session_token(signing_context, uuid4(), now=issued)

    claims = jwt.get_unverified_claims(token)

    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


def test_expired_token(signing_context):
    token = issue_session_token(
        signing_context, uuid4(), now=datetime.now(UTC) - timedelta(days=8)
    )

    result = verify_session_token(signing_context, token)

    assert result.error.code == ErrorCode.TOKEN_EXPIRED


def test_wrong_secret_is_signature_invalid(signing_context):
    other = SigningContext(secret="another-signing-secret-0123456789abcdef")
    token = issue_session_token(other, uuid4())

    result = verify_session_token(signing_context, token)

    assert result.error.code == ErrorCode.TOKEN_SIGNATURE_INVALID


def test_swapped_payload_is_signature_invalid(signing_context):
    header, _, signature = issue_session_token(signing_context, uuid4()).split(".")
    _, payload, _ = issue_session_token(signing_context, uuid4()).split(".")

    result = verify_session_token(signing_context, f"{header}.{payload}.{signature}")

    assert result.error.code == ErrorCode.TOKEN_SIGNATURE_INVALID


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_unparseable_token_is_malformed(signing_context, token):
    result = verify_session_token(signing_context, token)

    assert result.error.code == ErrorCode.TOKEN_MALFORMED


def test_missing_claims_are_malformed(signing_context):
    token = jwt.encode({"sub": str(uuid4())}, signing_context.secret, algorithm="HS256")

    result = verify_session_token(signing_context, token)

    assert result.error.code == ErrorCode.TOKEN_MALFORMED


def test_non_uuid_subject_is_malformed(signing_context):
    exp = datetime.now(UTC) + timedelta(hours=1)
    token = jwt.encode({"sub": "admin", "exp": exp}, signing_context.secret, algorithm="HS256")

    result = verify_session_token(signing_context, token)

    assert result.error.code == ErrorCode.TOKEN_MALFORMED


class _Config:
    SESSION_TOKEN_TTL_DAYS = 7

    def __init__(self, secret):
        self.JWT_SECRET = secret


@pytest.mark.parametrize("secret", [None, "", "too-short"])
def test_signing_context_requires_a_real_secret(secret):
    with pytest.raises(MissingSigningSecretError):
        SigningContext.from_config(_Config(secret))


def test_signing_context_from_config():
    context = SigningContext.from_config(_Config("s" * 32))

    assert context.secret == "s" * 32
    assert context.algorithm == "HS256"
    assert context.ttl == timedelta(days=7)


def test_token_honoured_up_to_exp_and_expired_one_second_after(signing_context):
    issued = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    token = issue_session_token(signing_context, uuid4(), now=issued)
    exp = issued + timedelta(days=7)

    assert verify_session_token(signing_context, token, now=exp - timedelta(seconds=1)).is_ok()
    assert verify_session_token(signing_context, token, now=exp).is_ok()
    # exp has one-second resolution
    assert verify_session_token(
        signing_context, token, now=exp + timedelta(milliseconds=999)
    ).is_ok()

    result = verify_session_token(signing_context, token, now=exp + timedelta(seconds=1))
    assert result.error.code == ErrorCode.TOKEN_EXPIRED


def test_naive_verification_time_is_utc(signing_context):
    issued = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    token = issue_session_token(signing_context, uuid4(), now=issued)
    exp_naive = datetime(2026, 3, 8, 12, 0)

    assert verify_session_token(signing_context, token, now=exp_naive).is_ok()
    result = verify_session_token(signing_context, token, now=exp_naive + timedelta(seconds=1))
    assert result.error.code == ErrorCode.TOKEN_EXPIRED


def test_signature_is_checked_before_expiry(signing_context):
    other = SigningContext(secret="another-signing-secret-0123456789abcdef")
    issued = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    token = issue_session_token(other, uuid4(), now=issued)

    result = verify_session_token(signing_context, token, now=issued + timedelta(days=30))

    assert result.error.code == ErrorCode.TOKEN_SIGNATURE_INVALID
