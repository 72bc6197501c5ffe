from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from auth_service.api.error import raise_for_error
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.passcode import ResetPasscodeUseCase, VerifyPasscodeUseCase
from auth_service.depends import (
    get_notification_producer,
    get_unit_of_work,
    get_user_profile_client,
)

router = APIRouter(prefix="/auth/passcode", tags=["Passcode"])


class VerifyPasscodeRequest(BaseModel):
    passcode: str = Field(..., min_length=6, max_length=6, description="Passcode from the email")


@router.put("/{user_id}/verify-passcode", status_code=status.HTTP_204_NO_CONTENT)
async def verify_passcode(
    user_id: UUID,
    request: VerifyPasscodeRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    user_profile: IUserProfileClient = Depends(get_user_profile_client),
    notifications: INotificationProducer = Depends(get_notification_producer),
):
    """
    Verify Passcode

    Confirms the user's email address with the passcode mailed to them.

    Raises:
        - 400 Bad Request: Passcode invalid or expired
        - 500 Internal Server Error: User service unavailable or verification failed
    """
    use_case = VerifyPasscodeUseCase(uow, user_profile, notifications)
    result = await use_case.execute(user_id, request.passcode)

    if result.is_err():
        raise_for_error(result.error)


@router.put("/{user_id}/reset-passcode", status_code=status.HTTP_204_NO_CONTENT)
async def reset_passcode(
    user_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
    user_profile: IUserProfileClient = Depends(get_user_profile_client),
    notifications: INotificationProducer = Depends(get_notification_producer),
):
    """
    Reset Passcode

    Issues a new passcode and mails it to the user.

    Raises:
        - 500 Internal Server Error: User service or email queue unavailable
    """
    use_case = ResetPasscodeUseCase(uow, user_profile, notifications)
    result = await use_case.execute(user_id)

    if result.is_err():
        raise_for_error(result.error)
