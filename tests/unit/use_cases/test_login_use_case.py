from unittest.mock import patch

import pytest
from fastapi import Response

from libs.result import Error, Return
from auth_service.app.services.password_service import hash_password
from auth_service.app.use_cases.auth.login_use_case import LoginUseCase
from auth_service.domain.entities import ErrorCode, Password, UserStatus


@pytest.fixture
def stored_password(mock_uow, auth_details):
    row = Password(user_id=auth_details.user_id, password_hash=hash_password("Secret123!"))
    mock_uow.passwords.get_by_user_id.return_value = row
    return row


@pytest.mark.asyncio
async def test_successful_login(mock_uow, token_settings, user_profile, auth_details, stored_password):
    """Active user with the right password gets a session and two cookies"""
    # Arrange
    user_profile.get_auth_details_by_email.return_value = Return.ok(auth_details)
    response = Response()
    use_case = LoginUseCase(mock_uow, token_settings, user_profile)

    # Act
    result = await use_case.execute("u@x.com", "Secret123!", response)

    # Assert
    assert result.is_ok()
    assert result.value.user_id == str(auth_details.user_id)
    assert result.value.roles == ["USER"]

    cookies = response.headers.getlist("set-cookie")
    assert len(cookies) == 2

    user_profile.get_auth_details_by_email.assert_called_once_with("u@x.com")
    mock_uow.passwords.get_by_user_id.assert_called_once_with(auth_details.user_id)
    mock_uow.refresh_tokens.create.assert_called_once()
    assert mock_uow.refresh_tokens.create.call_args.args[1] == auth_details.user_id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_login_wrong_password(mock_uow, token_settings, user_profile, auth_details, stored_password):
    user_profile.get_auth_details_by_email.return_value = Return.ok(auth_details)
    response = Response()

    result = await LoginUseCase(mock_uow, token_settings, user_profile).execute(
        "u@x.com", "WrongPass123!", response
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_CREDENTIALS
    assert response.headers.getlist("set-cookie") == []
    mock_uow.refresh_tokens.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_login_unknown_email_looks_like_wrong_password(mock_uow, token_settings, user_profile):
    user_profile.get_auth_details_by_email.return_value = Return.err(
        Error(ErrorCode.NOT_FOUND, "User not found")
    )

    with patch("auth_service.app.use_cases.auth.login_use_case.burn_password_check") as burn:
        result = await LoginUseCase(mock_uow, token_settings, user_profile).execute(
            "ghost@x.com", "Secret123!", Response()
        )

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_CREDENTIALS
    burn.assert_called_once_with("Secret123!")
    mock_uow.passwords.get_by_user_id.assert_not_called()


@pytest.mark.asyncio
async def test_login_without_stored_password(mock_uow, token_settings, user_profile, auth_details):
    user_profile.get_auth_details_by_email.return_value = Return.ok(auth_details)

    result = await LoginUseCase(mock_uow, token_settings, user_profile).execute(
        "u@x.com", "Secret123!", Response()
    )

    assert result.error.code == ErrorCode.INVALID_CREDENTIALS


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [UserStatus.suspended, UserStatus.locked, UserStatus.inactive])
async def test_login_blocked_account(mock_uow, token_settings, user_profile, auth_details, status):
    """Blocked accounts are refused before any password check"""
    user_profile.get_auth_details_by_email.return_value = Return.ok(
        auth_details.model_copy(update={"status": status})
    )

    result = await LoginUseCase(mock_uow, token_settings, user_profile).execute(
        "u@x.com", "Secret123!", Response()
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.ACCOUNT_SUSPENDED
    mock_uow.passwords.get_by_user_id.assert_not_called()
    mock_uow.refresh_tokens.create.assert_not_called()


@pytest.mark.asyncio
async def test_login_user_service_unavailable(mock_uow, token_settings, user_profile):
    user_profile.get_auth_details_by_email.return_value = Return.err(
        Error(ErrorCode.UPSTREAM_UNAVAILABLE, "Failed to retrieve user, please try again later")
    )

    result = await LoginUseCase(mock_uow, token_settings, user_profile).execute(
        "u@x.com", "Secret123!", Response()
    )

    assert result.error.code == ErrorCode.UPSTREAM_UNAVAILABLE
