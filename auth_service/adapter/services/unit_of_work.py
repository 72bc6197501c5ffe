from sqlmodel.ext.asyncio.session import AsyncSession

from auth_service.adapter.repositories.passcode_repository import PasscodeRepository
from auth_service.adapter.repositories.password_repository import PasswordRepository
from auth_service.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from auth_service.adapter.repositories.reset_token_repository import ResetTokenRepository
from auth_service.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.passwords = PasswordRepository(self.session)
        self.passcodes = PasscodeRepository(self.session)
        self.reset_tokens = ResetTokenRepository(self.session)
        self.refresh_tokens = RefreshTokenRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed by the use case is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
