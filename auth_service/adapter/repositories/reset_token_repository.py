from datetime import datetime
from typing import Callable, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.app.repositories.reset_token_repository import IResetTokenRepository
from auth_service.domain.entities import ResetToken


class ResetTokenRepository(IResetTokenRepository):
    """ResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[ResetToken]:
        """Get the reset token row of a user"""
        stmt = select(ResetToken).where(ResetToken.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[ResetToken]:
        """Get reset token row by its token value"""
        stmt = select(ResetToken).where(ResetToken.token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(
        self, user_id: UUID, mutate: Callable[[ResetToken], None]
    ) -> ResetToken:
        """Apply mutate to the user's row (created if missing) and save it"""
        reset_token = await self.get_by_user_id(user_id)
        if reset_token is None:
            reset_token = ResetToken(id=uuid4(), user_id=user_id)
        mutate(reset_token)
        self.session.add(reset_token)
        await self.session.flush()
        await self.session.refresh(reset_token)
        return reset_token

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete the reset token row of a user"""
        stmt = delete(ResetToken).where(ResetToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete every reset token that expired before now"""
        stmt = delete(ResetToken).where(ResetToken.expiry_date < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
