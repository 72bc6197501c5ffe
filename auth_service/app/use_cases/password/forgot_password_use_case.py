"""
Forgot Password Use Case

Issues a password reset token and mails it to the user.
"""

import logging

from libs.result import Result, Return
from auth_service.app.services.dtos import ResetPasswordEmail
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.reset_token_service import ResetTokenService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.common import account_suspended_error, fetch_user_info
from auth_service.domain.entities import ErrorCode

logger = logging.getLogger(__name__)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Unknown emails succeed without side effects (no email enumeration)
    - Suspended, locked and inactive accounts are refused
    - A new request replaces any outstanding reset token of the user
    - The token is valid for 15 minutes
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
        self.reset_tokens = ResetTokenService(uow)

    async def execute(self, email: str) -> Result[None]:
        logger.info(f"Password reset requested [email: {email}]")

        async with self.uow:
            details_result = await self.user_profile.get_auth_details_by_email(email)
            if details_result.is_err():
                if details_result.error.code == ErrorCode.NOT_FOUND:
                    logger.info(f"Password reset requested for unknown email: {email}")
                    return Return.ok(None)
                return Return.err(details_result.error)

            auth_details = details_result.value
            if auth_details.is_blocked:
                return Return.err(account_suspended_error(auth_details.status))

            user_info = await fetch_user_info(self.user_profile, auth_details.user_id)
            if user_info.is_err():
                return Return.err(user_info.error)

            token = await self.reset_tokens.create(auth_details.user_id)
            await self.uow.commit()

        sent = await self.notifications.send_reset_password_email(
            ResetPasswordEmail(
                first_name=user_info.value.first_name,
                email=user_info.value.email,
                token=token,
            )
        )
        if sent.is_err():
            return Return.err(sent.error)

        return Return.ok(None)
