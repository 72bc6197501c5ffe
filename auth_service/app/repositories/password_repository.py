from abc import ABC, abstractmethod
from typing import Callable, Optional
from uuid import UUID

from auth_service.domain.entities import Password


class IPasswordRepository(ABC):
    """Password repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[Password]:
        """Get the password row of a user"""
        pass

    @abstractmethod
    async def upsert(
        self, user_id: UUID, mutate: Callable[[Password], None]
    ) -> Password:
        """Apply mutate to the user's row (created if missing) and save it"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete the password row of a user. Returns count of deleted rows."""
        pass
