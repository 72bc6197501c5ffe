"""
Purge Expired Credentials Use Case

Physically deletes passcodes, reset tokens and refresh tokens whose
expiry date has passed. Expired rows are already rejected on read; this
only reclaims storage.
"""

import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from libs.result import Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utcnow

logger = logging.getLogger(__name__)


class PurgeResult(BaseModel):
    passcodes: int
    reset_tokens: int
    refresh_tokens: int


class PurgeExpiredCredentialsUseCase:
    """
    Use case for the data retention sweep.

    Business Rules:
    - Only rows with expiry_date strictly before `now` are removed
    - All three tables are swept in one transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[PurgeResult]:
        now = now or utcnow()

        async with self.uow:
            result = PurgeResult(
                passcodes=await self.uow.passcodes.delete_expired(now),
                reset_tokens=await self.uow.reset_tokens.delete_expired(now),
                refresh_tokens=await self.uow.refresh_tokens.delete_expired(now),
            )
            await self.uow.commit()

        logger.info(
            f"Purged expired credentials: {result.passcodes} passcode(s), "
            f"{result.reset_tokens} reset token(s), {result.refresh_tokens} refresh token(s)"
        )
        return Return.ok(result)
