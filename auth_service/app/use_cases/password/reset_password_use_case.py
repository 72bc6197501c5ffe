"""
Reset Password Use Case

Sets a new password with a reset token from a forgot-password email.
"""

import logging

from libs.result import Result, Return
from auth_service.app.services.password_service import PasswordService
from auth_service.app.services.reset_token_service import (
    RESET_TOKEN_INVALID_ERROR,
    ResetTokenService,
)
from auth_service.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a password.

    Business Rules:
    - Unknown, expired and mismatched tokens all yield RESET_TOKEN_INVALID
    - The token is single use: it is deleted with the password change
    - All refresh tokens of the user are revoked; access tokens already
      issued stay valid until they expire
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.passwords = PasswordService(uow)
        self.reset_tokens = ResetTokenService(uow)

    async def execute(self, token: str, password: str) -> Result[None]:
        async with self.uow:
            found = await self.reset_tokens.find(token)
            if found.is_err():
                logger.info("Reset password attempted with unknown token")
                return Return.err(RESET_TOKEN_INVALID_ERROR)

            reset_token = found.value
            valid = self.reset_tokens.validate(reset_token, token)
            if valid.is_err():
                return Return.err(valid.error)

            user_id = reset_token.user_id
            await self.passwords.create_or_replace(user_id, password)
            await self.reset_tokens.delete_for_user(user_id)
            revoked = await self.uow.refresh_tokens.delete_by_user_id(user_id)

            await self.uow.commit()

        logger.info(
            f"Password of User [userId: '{user_id}'] has been reset, "
            f"{revoked} session(s) revoked"
        )
        return Return.ok(None)
