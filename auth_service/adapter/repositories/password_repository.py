from typing import Callable, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.app.repositories.password_repository import IPasswordRepository
from auth_service.domain.entities import Password


class PasswordRepository(IPasswordRepository):
    """Password repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[Password]:
        """Get the password row of a user"""
        stmt = select(Password).where(Password.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(
        self, user_id: UUID, mutate: Callable[[Password], None]
    ) -> Password:
        """Apply mutate to the user's row (created if missing) and save it"""
        password = await self.get_by_user_id(user_id)
        if password is None:
            password = Password(id=uuid4(), user_id=user_id)
        mutate(password)
        self.session.add(password)
        await self.session.flush()
        await self.session.refresh(password)
        return password

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete the password row of a user"""
        stmt = delete(Password).where(Password.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
