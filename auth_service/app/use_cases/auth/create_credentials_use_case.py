"""
Create Credentials Use Case

Stores the first password of a new user and mails a verification passcode.
"""

import logging

from libs.result import Result, Return
from auth_service.app.services.dtos import VerificationEmail
from auth_service.app.services.notification_producer import INotificationProducer
from auth_service.app.services.passcode_service import PasscodeService
from auth_service.app.services.password_service import PasswordService
from auth_service.app.services.unit_of_work import UnitOfWork
from .dtos import CreateCredentialsCommand

logger = logging.getLogger(__name__)


class CreateCredentialsUseCase:
    """
    Use case for creating a user's credentials.

    Business Rules:
    - Password and passcode are written in one transaction
    - The verification email is enqueued after commit; if the enqueue
      fails the credentials stay and the request can be retried
      (both writes are upserts)
    """

    def __init__(self, uow: UnitOfWork, notifications: INotificationProducer):
        self.uow = uow
        self.notifications = notifications
        self.passwords = PasswordService(uow)
        self.passcodes = PasscodeService(uow)

    async def execute(self, command: CreateCredentialsCommand) -> Result[None]:
        logger.info(f"Creating Credentials for User [userId: '{command.user_id}']")

        async with self.uow:
            await self.passwords.create_or_replace(command.user_id, command.password)
            passcode = await self.passcodes.reset(command.user_id)
            await self.uow.commit()

        sent = await self.notifications.send_verification_email(
            VerificationEmail(
                first_name=command.first_name,
                email=command.email,
                passcode=passcode,
            )
        )
        if sent.is_err():
            return Return.err(sent.error)

        return Return.ok(None)
