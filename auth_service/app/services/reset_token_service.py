"""
Reset Token Service

Issues and checks the opaque tokens mailed out for forgotten passwords.
"""

import hmac
import logging
from datetime import timedelta
from uuid import UUID

from libs.result import Error, Result, Return
from auth_service.app.services.token_codec import TokenCodec
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utcnow
from auth_service.domain.entities import ErrorCode, ResetToken

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(minutes=15)

RESET_TOKEN_INVALID_ERROR = Error(
    ErrorCode.RESET_TOKEN_INVALID, "Invalid or expired password reset token"
)


class ResetTokenService:
    """
    Reset token credential operations.

    Business Rules:
    - One reset token per user, regenerated in place on every request
    - Valid for 15 minutes
    - Expired and mismatched tokens produce the same client-facing error
    """

    def __init__(self, uow: UnitOfWork, codec: TokenCodec = None):
        self.uow = uow
        self.codec = codec or TokenCodec()

    async def create(self, user_id: UUID) -> str:
        """Issue a fresh reset token for the user; returns the token"""
        logger.info(f"Creating Reset Token for User [userId: '{user_id}']")
        token = self.codec.generate_reset_token()

        def apply(reset_token: ResetToken) -> None:
            reset_token.token = token
            reset_token.expiry_date = utcnow() + RESET_TOKEN_TTL

        await self.uow.reset_tokens.upsert(user_id, apply)
        return token

    async def find(self, token: str) -> Result[ResetToken]:
        reset_token = await self.uow.reset_tokens.get_by_token(token)
        if reset_token is None:
            return Return.err(Error(ErrorCode.NOT_FOUND, "Reset token not found"))
        return Return.ok(reset_token)

    def validate(self, reset_token: ResetToken, submitted: str) -> Result[None]:
        if reset_token.expiry_date < utcnow():
            logger.info(f"Reset token of User [userId: '{reset_token.user_id}'] has expired")
            return Return.err(RESET_TOKEN_INVALID_ERROR)

        if not hmac.compare_digest(reset_token.token.encode(), submitted.encode()):
            logger.info(f"Reset token of User [userId: '{reset_token.user_id}'] does not match")
            return Return.err(RESET_TOKEN_INVALID_ERROR)

        return Return.ok(None)

    async def delete_for_user(self, user_id: UUID) -> int:
        logger.info(f"Deleting Reset Tokens for User [userId: '{user_id}']")
        return await self.uow.reset_tokens.delete_by_user_id(user_id)
