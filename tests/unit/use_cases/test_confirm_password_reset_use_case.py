"""
Unit tests for ConfirmPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import datetime, timedelta
from unittest.mock import patch
from uuid import uuid4

import bcrypt
import pytest

from src.app.services.credentials import hash_reset_token
from src.app.use_cases.auth import ConfirmPasswordResetUseCase
from src.domain.entities import User
from src.domain.errors import ErrorCode

NOW = datetime(2026, 3, 1, 12, 30, 0)
RAW_TOKEN = "raw-reset-token-value"
TOKEN_HASH = hash_reset_token(RAW_TOKEN)


@pytest.fixture
def pending_user():
    return User(
        id=uuid4(),
        full_name="Asha Rao",
        email="a@x.com",
        password_hash="old_hashed_password",
        reset_token_hash=TOKEN_HASH,
        reset_token_expires_at=NOW + timedelta(minutes=30),
    )


@pytest.fixture(autouse=True)
def fast_bcrypt():
    with patch("src.app.services.credentials.BCRYPT_ROUNDS", 4):
        yield


async def confirm(mock_uow, token=RAW_TOKEN, password="NewPassw0rd2", now=NOW):
    use_case = ConfirmPasswordResetUseCase(mock_uow, clock=lambda: now)
    return await use_case.execute("a@x.com", token, password)


@pytest.mark.asyncio
async def test_successful_password_reset_confirmation(mock_uow, pending_user):
    mock_uow.users.get_by_email.return_value = pending_user

    result = await confirm(mock_uow)

    assert result.is_ok()
    assert result.value.status == "success"

    email, new_hash, expected_hash, now = (
        mock_uow.users.update_password_and_clear_reset.call_args.args
    )
    assert email == "a@x.com"
    assert expected_hash == TOKEN_HASH
    assert now == NOW
    assert bcrypt.checkpw(b"NewPassw0rd2", new_hash.encode())
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_wrong_token(mock_uow, pending_user):
    mock_uow.users.get_by_email.return_value = pending_user

    result = await confirm(mock_uow, token="not-the-token")

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_OR_EXPIRED_TOKEN
    mock_uow.users.update_password_and_clear_reset.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_no_pending_reset(mock_uow):
    mock_uow.users.get_by_email.return_value = User(
        id=uuid4(), full_name="Asha Rao", email="a@x.com", password_hash="x"
    )

    result = await confirm(mock_uow)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_OR_EXPIRED_TOKEN


@pytest.mark.asyncio
async def test_expired_token_is_cleared(mock_uow, pending_user):
    mock_uow.users.get_by_email.return_value = pending_user

    result = await confirm(mock_uow, now=pending_user.reset_token_expires_at)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_OR_EXPIRED_TOKEN
    mock_uow.users.clear_reset_token.assert_called_once_with("a@x.com", TOKEN_HASH)
    mock_uow.commit.assert_called_once()
    mock_uow.users.update_password_and_clear_reset.assert_not_called()


@pytest.mark.asyncio
async def test_weak_password_keeps_token(mock_uow, pending_user):
    mock_uow.users.get_by_email.return_value = pending_user

    result = await confirm(mock_uow, password="weak")

    assert result.is_err()
    assert result.error.code == ErrorCode.WEAK_PASSWORD
    mock_uow.users.update_password_and_clear_reset.assert_not_called()
    mock_uow.users.clear_reset_token.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_consumption_loses(mock_uow, pending_user):
    """Another request consumed the token between our read and our write"""
    mock_uow.users.get_by_email.return_value = pending_user
    mock_uow.users.update_password_and_clear_reset.return_value = 0

    result = await confirm(mock_uow)

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_OR_EXPIRED_TOKEN
    mock_uow.commit.assert_not_called()
