from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from auth_service.domain.entities import ResetToken


class IResetTokenRepository(ABC):
    """ResetToken repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[ResetToken]:
        """Get the reset token row of a user"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[ResetToken]:
        """Get reset token row by its token value"""
        pass

    @abstractmethod
    async def upsert(
        self, user_id: UUID, mutate: Callable[[ResetToken], None]
    ) -> ResetToken:
        """Apply mutate to the user's row (created if missing) and save it"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete the reset token row of a user. Returns count of deleted rows."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every reset token with expiry_date before now. Returns count."""
        pass
