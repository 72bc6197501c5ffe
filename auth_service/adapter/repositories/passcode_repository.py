from datetime import datetime
from typing import Callable, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.app.repositories.passcode_repository import IPasscodeRepository
from auth_service.domain.entities import Passcode


class PasscodeRepository(IPasscodeRepository):
    """Passcode repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[Passcode]:
        """Get the passcode row of a user"""
        stmt = select(Passcode).where(Passcode.user_id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(
        self, user_id: UUID, mutate: Callable[[Passcode], None]
    ) -> Passcode:
        """Apply mutate to the user's row (created if missing) and save it"""
        passcode = await self.get_by_user_id(user_id)
        if passcode is None:
            passcode = Passcode(id=uuid4(), user_id=user_id)
        mutate(passcode)
        self.session.add(passcode)
        await self.session.flush()
        await self.session.refresh(passcode)
        return passcode

    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete the passcode row of a user"""
        stmt = delete(Passcode).where(Passcode.user_id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete every passcode that expired before now"""
        stmt = delete(Passcode).where(Passcode.expiry_date < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
