"""
Verify Password Use Case

Checks a password for an already identified user.
"""

from uuid import UUID

from libs.result import Result, Return
from auth_service.app.services.password_service import PasswordService
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.use_cases.common import INVALID_CREDENTIALS_ERROR


class VerifyPasswordUseCase:
    """
    Use case for confirming a user's password.

    Business Rules:
    - A missing password row and a wrong password are indistinguishable
      (INVALID_CREDENTIALS)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.passwords = PasswordService(uow)

    async def execute(self, user_id: UUID, password: str) -> Result[None]:
        async with self.uow:
            verified = await self.passwords.verify(user_id, password)
            if verified.is_err():
                return Return.err(INVALID_CREDENTIALS_ERROR)

        return Return.ok(None)
