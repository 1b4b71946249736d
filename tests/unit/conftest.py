from unittest.mock import AsyncMock, MagicMock

import pytest

from src.api.utils.jwt import SigningContext

TEST_SECRET = "unit-test-signing-secret-0123456789abcdef"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.set_reset_token = AsyncMock(return_value=1)
    uow.users.update_password_and_clear_reset = AsyncMock(return_value=1)
    uow.users.clear_reset_token = AsyncMock(return_value=1)

    uow.bookings = MagicMock()
    uow.bookings.create = AsyncMock(side_effect=lambda booking: booking)
    uow.bookings.get_for_user = AsyncMock(return_value=None)
    uow.bookings.list_by_user_id = AsyncMock(return_value=[])
    return uow


@pytest.fixture
def signing_context():
    return SigningContext(secret=TEST_SECRET)
