from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.app.repositories.refresh_token_repository import IRefreshTokenRepository
from auth_service.domain.entities import RefreshToken


class RefreshTokenRepository(IRefreshTokenRepository):
    """RefreshToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, token_id: UUID) -> Optional[RefreshToken]:
        """Get refresh token row by ID"""
        stmt = select(RefreshToken).where(RefreshToken.id == token_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id_and_user_id(
        self, token_id: UUID, user_id: UUID
    ) -> Optional[RefreshToken]:
        """Get refresh token row by ID, only if it belongs to the user"""
        stmt = select(RefreshToken).where(
            RefreshToken.id == token_id, RefreshToken.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(
        self, token_id: UUID, user_id: UUID, expiry_date: datetime
    ) -> RefreshToken:
        """Create (or re-arm) the refresh token row with the given ID"""
        refresh_token = await self.get_by_id_and_user_id(token_id, user_id)
        if refresh_token is None:
            refresh_token = RefreshToken(id=token_id, user_id=user_id)
        refresh_token.expiry_date = expiry_date
        self.session.add(refresh_token)
        await self.session.flush()
        await self.session.refresh(refresh_token)
        return refresh_token

    async def delete_by_id(self, token_id: UUID) -> bool:
        """Delete a refresh token row; False if it was already gone"""
        stmt = delete(RefreshToken).where(RefreshToken.id == token_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all refresh tokens of a user"""
        stmt = delete(RefreshToken).where(RefreshToken.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete every refresh token that expired before now"""
        stmt = delete(RefreshToken).where(RefreshToken.expiry_date < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
