from abc import ABC, abstractmethod

from auth_service.app.repositories.passcode_repository import IPasscodeRepository
from auth_service.app.repositories.password_repository import IPasswordRepository
from auth_service.app.repositories.refresh_token_repository import IRefreshTokenRepository
from auth_service.app.repositories.reset_token_repository import IResetTokenRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    passwords: IPasswordRepository
    passcodes: IPasscodeRepository
    reset_tokens: IResetTokenRepository
    refresh_tokens: IRefreshTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
