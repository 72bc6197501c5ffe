from datetime import datetime
from uuid import uuid4

import pytest

from auth_service.app.use_cases.data import DeleteUserAuthDataUseCase
from auth_service.app.use_cases.maintenance import PurgeExpiredCredentialsUseCase


@pytest.mark.asyncio
async def test_delete_user_auth_data(mock_uow):
    user_id = uuid4()

    result = await DeleteUserAuthDataUseCase(mock_uow).execute(user_id)

    assert result.is_ok()
    mock_uow.passcodes.delete_by_user_id.assert_called_once_with(user_id)
    mock_uow.passwords.delete_by_user_id.assert_called_once_with(user_id)
    mock_uow.reset_tokens.delete_by_user_id.assert_called_once_with(user_id)
    mock_uow.refresh_tokens.delete_by_user_id.assert_called_once_with(user_id)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_purge_expired_credentials(mock_uow):
    now = datetime(2030, 1, 1, 12, 0, 0)
    mock_uow.passcodes.delete_expired.return_value = 2
    mock_uow.reset_tokens.delete_expired.return_value = 1
    mock_uow.refresh_tokens.delete_expired.return_value = 5

    result = await PurgeExpiredCredentialsUseCase(mock_uow).execute(now)

    assert result.is_ok()
    assert result.value.passcodes == 2
    assert result.value.reset_tokens == 1
    assert result.value.refresh_tokens == 5
    mock_uow.passcodes.delete_expired.assert_called_once_with(now)
    mock_uow.refresh_tokens.delete_expired.assert_called_once_with(now)
    mock_uow.commit.assert_called_once()
