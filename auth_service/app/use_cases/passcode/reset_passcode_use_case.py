"""
Reset Passcode Use Case

Issues a new verification passcode and mails it to the user.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from auth_service.app.services.dtos import VerificationEmail
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.passcode_service import PasscodeService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.common import fetch_user_info

logger = logging.getLogger(__name__)


class ResetPasscodeUseCase:
    """
    Use case for resending a verification passcode.

    Business Rules:
    - The previous passcode is overwritten, so only the newest code works
    - The profile lookup happens first: no passcode is issued for a user
      the user service cannot describe
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

    async def execute(self, user_id: UUID) -> Result[None]:
        async with self.uow:
            user_info = await fetch_user_info(self.user_profile, user_id)
            if user_info.is_err():
                return Return.err(user_info.error)

            passcode = await self.passcodes.reset(user_id)
            await self.uow.commit()

        sent = await self.notifications.send_verification_email(
            VerificationEmail(
                first_name=user_info.value.first_name,
                email=user_info.value.email,
                passcode=passcode,
            )
        )
        if sent.is_err():
            return Return.err(sent.error)

        logger.info(f"New Passcode sent to User [userId: '{user_id}']")
        return Return.ok(None)
