"""
Delete User Auth Data Use Case

Removes every credential this service stores for a user.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from auth_service.app.services.passcode_service import PasscodeService
from auth_service.app.services.password_service import PasswordService
from auth_service.app.services.reset_token_service import ResetTokenService
from auth_service.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteUserAuthDataUseCase:
    """
    Use case for erasing a user's auth data.

    Business Rules:
    - Passcode, password, reset token and refresh tokens go in one transaction
    - Idempotent: deleting for a user with no data succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.passwords = PasswordService(uow)
        self.passcodes = PasscodeService(uow)
        self.reset_tokens = ResetTokenService(uow)

    async def execute(self, user_id: UUID) -> Result[None]:
        logger.info(f"Deleting auth data of User [userId: '{user_id}']")

        async with self.uow:
            await self.passcodes.delete_for_user(user_id)
            await self.passwords.delete_for_user(user_id)
            await self.reset_tokens.delete_for_user(user_id)
            await self.uow.refresh_tokens.delete_by_user_id(user_id)
            await self.uow.commit()

        return Return.ok(None)
