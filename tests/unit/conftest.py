import base64
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from auth_service.app.services.dtos import AuthDetails, UserInfo
from auth_service.app.services.session_token_service import TokenSettings
from auth_service.domain.entities import UserStatus
from tests.utils.clock import ACCESS_SECRET, REFRESH_SECRET, Clock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.passwords = MagicMock()
    uow.passwords.get_by_user_id = AsyncMock(return_value=None)
    uow.passwords.upsert = AsyncMock()
    uow.passwords.delete_by_user_id = AsyncMock(return_value=0)

    uow.passcodes = MagicMock()
    uow.passcodes.get_by_user_id = AsyncMock(return_value=None)
    uow.passcodes.upsert = AsyncMock()
    uow.passcodes.delete_by_user_id = AsyncMock(return_value=0)
    uow.passcodes.delete_expired = AsyncMock(return_value=0)

    uow.reset_tokens = MagicMock()
    uow.reset_tokens.get_by_user_id = AsyncMock(return_value=None)
    uow.reset_tokens.get_by_token = AsyncMock(return_value=None)
    uow.reset_tokens.upsert = AsyncMock()
    uow.reset_tokens.delete_by_user_id = AsyncMock(return_value=0)
    uow.reset_tokens.delete_expired = AsyncMock(return_value=0)

    uow.refresh_tokens = MagicMock()
    uow.refresh_tokens.get_by_id = AsyncMock(return_value=None)
    uow.refresh_tokens.get_by_id_and_user_id = AsyncMock(return_value=None)
    uow.refresh_tokens.create = AsyncMock()
    uow.refresh_tokens.delete_by_id = AsyncMock(return_value=True)
    uow.refresh_tokens.delete_by_user_id = AsyncMock(return_value=0)
    uow.refresh_tokens.delete_expired = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def token_settings(clock):
    return TokenSettings(
        access_secret=base64.b64decode(ACCESS_SECRET),
        refresh_secret=base64.b64decode(REFRESH_SECRET),
        environment="development",
        clock=clock,
    )


@pytest.fixture
def auth_details():
    return AuthDetails(
        user_id=uuid4(),
        roles=["USER"],
        authorities=["VIEW_CONTENT"],
        status=UserStatus.active,
    )


@pytest.fixture
def user_info():
    return UserInfo(first_name="Ada", last_name="Lovelace", email="ada@example.com")


@pytest.fixture
def user_profile():
    client = MagicMock()
    client.get_auth_details_by_email = AsyncMock()
    client.get_auth_details_by_user_id = AsyncMock()
    client.get_user = AsyncMock()
    client.verify_user_email = AsyncMock()
    return client


@pytest.fixture
def notifications():
    producer = MagicMock()
    producer.send_verification_email = AsyncMock()
    producer.send_welcome_email = AsyncMock()
    producer.send_reset_password_email = AsyncMock()
    return producer
