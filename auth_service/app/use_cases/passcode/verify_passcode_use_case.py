"""
Verify Passcode Use Case

Confirms a user's email address with the passcode mailed to them.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from auth_service.app.services.dtos import WelcomeEmail
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.passcode_service import PasscodeService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.common import fetch_user_info
from auth_service.domain.entities import ErrorCode

logger = logging.getLogger(__name__)


class VerifyPasscodeUseCase:
    """
    Use case for verifying a passcode.

    Business Rules:
    - A user without a passcode gets PASSCODE_INVALID
    - An expired passcode is kept so a reset can replace it
    - The passcode is only consumed once the user service has marked the
      email verified; if that call fails the passcode can be retried
    - The welcome email is best effort: a failed enqueue is logged and
      the verification still succeeds
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_profile: IUserProfileClient,
        notifications: INotificationProducer,
    ):
        self.uow = uow
        self.user_profile = user_profile
        self.notifications = notifications
        self.passcodes = PasscodeService(uow)

    async def execute(self, user_id: UUID, passcode: str) -> Result[None]:
        async with self.uow:
            verified = await self.passcodes.verify(user_id, passcode)
            if verified.is_err():
                if verified.error.code == ErrorCode.NOT_FOUND:
                    return Return.err(
                        Error(ErrorCode.PASSCODE_INVALID, "Passcode is incorrect")
                    )
                return Return.err(verified.error)

            user_info = await fetch_user_info(self.user_profile, user_id)
            if user_info.is_err():
                return Return.err(user_info.error)

            email_verified = await self.user_profile.verify_user_email(user_id)
            if email_verified.is_err():
                return Return.err(email_verified.error)

            await self.passcodes.delete_for_user(user_id)
            await self.uow.commit()

        logger.info(f"Email of User [userId: '{user_id}'] has been verified")

        sent = await self.notifications.send_welcome_email(
            WelcomeEmail(
                first_name=user_info.value.first_name,
                email=user_info.value.email,
            )
        )
        if sent.is_err():
            logger.error(
                f"Welcome email for User [userId: '{user_id}'] was not sent: "
                f"{sent.error.message}"
            )

        return Return.ok(None)
