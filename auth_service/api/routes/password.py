import re
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from auth_service.api.error import raise_for_error
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.password_service import check_password_length
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.password import (
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    UpdatePasswordUseCase,
    VerifyPasswordUseCase,
)
from auth_service.depends import (
    get_current_user_id,
    get_notification_producer,
    get_unit_of_work,
    get_user_profile_client,
)

router = APIRouter(prefix="/password", tags=["Password"])

PASSWORD_RULES = [
    (re.compile(r"[a-z]"), "must contain at least one lowercase letter"),
    (re.compile(r"[A-Z]"), "must contain at least one uppercase letter"),
    (re.compile(r"\d"), "must contain at least one digit"),
    (re.compile(r"[!@#$%^&*(),.?\":{}|<>]"), "must contain at least one special character"),
]


def check_password_strength(password: str) -> str:
    """Enforce the character classes and byte limit of a new password"""
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(f"password {message}")
    return check_password_length(password)


class VerifyPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")
    password: str = Field(..., min_length=1)


@router.post("/verify", status_code=status.HTTP_204_NO_CONTENT)
async def verify_password(
    request: VerifyPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Verify Password

    Raises:
        - 401 Unauthorized: Wrong password or no password stored
    """
    result = await VerifyPasswordUseCase(uow).execute(request.user_id, request.password)

    if result.is_err():
        raise_for_error(result.error)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post("/forgot-password", status_code=status.HTTP_204_NO_CONTENT)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    user_profile: IUserProfileClient = Depends(get_user_profile_client),
    notifications: INotificationProducer = Depends(get_notification_producer),
):
    """
    Forgot Password

    Mails a password reset token. Always returns 204 for unknown emails
    so that registered addresses cannot be enumerated.

    Raises:
        - 403 Forbidden: Account suspended, locked or inactive
        - 500 Internal Server Error: User service or email queue unavailable
    """
    use_case = ForgotPasswordUseCase(uow, user_profile, notifications)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    password: str = Field(..., min_length=8, max_length=64, description="New password")
    reset_token: str = Field(..., alias="resetToken", min_length=1, description="Token from the email")

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)


@router.put("/reset-password", status_code=status.HTTP_204_NO_CONTENT)
async def reset_password(
    request: ResetPasswordRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Reset Password

    Sets a new password with a reset token and signs the user out of
    every session.

    Raises:
        - 400 Bad Request: Reset token unknown, expired or mismatched
        - 422 Unprocessable Entity: Password too weak (handled by FastAPI)
    """
    result = await ResetPasswordUseCase(uow).execute(request.reset_token, request.password)

    if result.is_err():
        raise_for_error(result.error)


class UpdatePasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=8, max_length=64)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)


@router.put("/update-password", status_code=status.HTTP_204_NO_CONTENT)
async def update_password(
    request: UpdatePasswordRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Password

    Changes the password of the signed-in user (access token cookie).

    Raises:
        - 401 Unauthorized: Missing or invalid access token, or wrong current password
        - 422 Unprocessable Entity: New password too weak (handled by FastAPI)
    """
    use_case = UpdatePasswordUseCase(uow)
    result = await use_case.execute(user_id, request.current_password, request.new_password)

    if result.is_err():
        raise_for_error(result.error)
