"""
Logout Use Case

Ends the session carried by the request cookies.
"""

import logging

from fastapi import Request, Response
from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result, Return
from auth_service.app.services.session_token_service import SessionTokenService, TokenSettings
from auth_service.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for user logout.

    Business Rules:
    - Deleting the RefreshToken row is best effort; a missing or
      unreadable refresh cookie is not an error
    - Auth cookies are always cleared, whatever happened to the delete
    """

    def __init__(self, uow: UnitOfWork, token_settings: TokenSettings):
        self.uow = uow
        self.tokens = SessionTokenService(token_settings, uow)

    async def execute(self, request: Request, response: Response) -> Result[None]:
        try:
            await self._delete_current_session(request)
        except SQLAlchemyError:
            logger.exception("Failed to delete refresh token during logout")
        finally:
            self.tokens.clear_auth_cookies(response)

        return Return.ok(None)

    async def _delete_current_session(self, request: Request) -> None:
        refresh_token = self.tokens.extract_refresh_token(request)
        if not refresh_token:
            logger.info("Logout without refresh token; nothing to delete")
            return

        token_id = self.tokens.extract_refresh_token_id(refresh_token)
        if token_id.is_err():
            logger.info("Logout with unreadable refresh token; nothing to delete")
            return

        async with self.uow:
            await self.uow.refresh_tokens.delete_by_id(token_id.value)
            await self.uow.commit()

        logger.info(f"Refresh token [id: '{token_id.value}'] has been deleted")
