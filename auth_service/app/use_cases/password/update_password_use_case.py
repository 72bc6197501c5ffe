"""
Update Password Use Case

Changes the password of a signed-in user.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from auth_service.app.services.password_service import PasswordService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.common import INVALID_CREDENTIALS_ERROR

logger = logging.getLogger(__name__)


class UpdatePasswordUseCase:
    """
    Use case for updating a password.

    Business Rules:
    - The current password must be confirmed first
    - Existing sessions are left alone
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.passwords = PasswordService(uow)

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[None]:
        async with self.uow:
            verified = await self.passwords.verify(user_id, current_password)
            if verified.is_err():
                return Return.err(INVALID_CREDENTIALS_ERROR)

            await self.passwords.create_or_replace(user_id, new_password)
            await self.uow.commit()

        logger.info(f"Password of User [userId: '{user_id}'] has been updated")
        return Return.ok(None)
