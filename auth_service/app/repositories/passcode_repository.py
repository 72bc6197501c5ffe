from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from auth_service.domain.entities import Passcode


class IPasscodeRepository(ABC):
    """Passcode repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[Passcode]:
        """Get the passcode row of a user"""
        pass

    @abstractmethod
    async def upsert(
        self, user_id: UUID, mutate: Callable[[Passcode], None]
    ) -> Passcode:
        """Apply mutate to the user's row (created if missing) and save it"""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete the passcode row of a user. Returns count of deleted rows."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every passcode with expiry_date before now. Returns count."""
        pass
