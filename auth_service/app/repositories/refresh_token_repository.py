from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from auth_service.domain.entities import RefreshToken


class IRefreshTokenRepository(ABC):
    """RefreshToken repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, token_id: UUID) -> Optional[RefreshToken]:
        """Get refresh token row by ID"""
        pass

    @abstractmethod
    async def get_by_id_and_user_id(
        self, token_id: UUID, user_id: UUID
    ) -> Optional[RefreshToken]:
        """Get refresh token row by ID, only if it belongs to the user"""
        pass

    @abstractmethod
    async def create(
        self, token_id: UUID, user_id: UUID, expiry_date: datetime
    ) -> RefreshToken:
        """Create (or re-arm) the refresh token row with the given ID"""
        pass

    @abstractmethod
    async def delete_by_id(self, token_id: UUID) -> bool:
        """Delete a refresh token row. Returns True if the row existed."""
        pass

    @abstractmethod
    async def delete_by_user_id(self, user_id: UUID) -> int:
        """Delete all refresh tokens of a user. Returns count of deleted rows."""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete every refresh token with expiry_date before now. Returns count."""
        pass
