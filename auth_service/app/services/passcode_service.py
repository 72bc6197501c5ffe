"""
Passcode Service

Issues and checks the one-time passcodes used for email verification.
"""

import hmac
import logging
from datetime import timedelta
from uuid import UUID

from libs.result import Error, Result, Return
from auth_service.app.services.token_codec import TokenCodec
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utcnow
from auth_service.domain.entities import ErrorCode, Passcode

logger = logging.getLogger(__name__)

PASSCODE_TTL = timedelta(minutes=15)


class PasscodeService:
    """
    Passcode credential operations.

    Business Rules:
    - One passcode per user, regenerated in place on every reset
    - Valid for 15 minutes
    - verify() is a pure check: an expired row is kept and a successful
      check does not consume the code; the calling flow deletes it
    """

    def __init__(self, uow: UnitOfWork, codec: TokenCodec = None):
        self.uow = uow
        self.codec = codec or TokenCodec()

    async def verify(self, user_id: UUID, submitted: str) -> Result[Passcode]:
        logger.info(f"Verifying Passcode for User [userId: '{user_id}']")
        passcode = await self.uow.passcodes.get_by_user_id(user_id)

        if passcode is None:
            return Return.err(
                Error(ErrorCode.NOT_FOUND, f"Passcode for user {user_id} not found")
            )

        if passcode.expiry_date < utcnow():
            return Return.err(Error(ErrorCode.PASSCODE_EXPIRED, "Passcode has expired"))

        if not hmac.compare_digest(passcode.passcode.encode(), submitted.encode()):
            return Return.err(Error(ErrorCode.PASSCODE_INVALID, "Passcode is incorrect"))

        return Return.ok(passcode)

    async def reset(self, user_id: UUID) -> str:
        """Issue a fresh passcode for the user; returns the new code"""
        logger.info(f"Resetting Passcode for User [userId: '{user_id}']")
        code = self.codec.generate_passcode()

        def apply(passcode: Passcode) -> None:
            passcode.passcode = code
            passcode.expiry_date = utcnow() + PASSCODE_TTL

        await self.uow.passcodes.upsert(user_id, apply)
        return code

    async def delete_for_user(self, user_id: UUID) -> int:
        logger.info(f"Deleting Passcodes for User [userId: '{user_id}']")
        return await self.uow.passcodes.delete_by_user_id(user_id)
