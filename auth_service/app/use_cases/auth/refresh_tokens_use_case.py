"""
Refresh Tokens Use Case

Rotates the refresh token presented in the refresh cookie.
"""

import logging

from fastapi import Request, Response

from libs.result import Error, Result, Return
from auth_service.app.services.session_token_service import (
    INVALID_TOKEN_ERROR,
    SessionTokenService,
    TokenSettings,
)
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.common import INVALID_CREDENTIALS_ERROR, account_suspended_error
from auth_service.domain.entities import ErrorCode

logger = logging.getLogger(__name__)

SESSION_EXPIRED_ERROR = Error(ErrorCode.SESSION_EXPIRED, "Session has expired, please log in again")


class RefreshTokensUseCase:
    """
    Use case for refreshing the auth cookies.

    Business Rules:
    - Refresh tokens are single use: the presented one is deleted and a
      new RefreshToken row and cookie pair replace it
    - The new session is created before the old row is removed, all in
      one transaction
    - The old row is removed with compare-and-delete: if a concurrent
      request already rotated it, this one fails and its new row is
      rolled back
    - A token whose row is gone revokes every session of the user; that
      revocation is committed even though the request fails
    - Roles, authorities and status are re-read from the user service
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_settings: TokenSettings,
        user_profile: IUserProfileClient,
    ):
        self.uow = uow
        self.user_profile = user_profile
        self.tokens = SessionTokenService(token_settings, uow)

    async def execute(self, request: Request, response: Response) -> Result[None]:
        logger.info("Refreshing auth tokens")

        refresh_token = self.tokens.extract_refresh_token(request)
        if not refresh_token:
            logger.warning("Refresh token is missing from the request")
            return Return.err(SESSION_EXPIRED_ERROR)

        async with self.uow:
            validated = await self.tokens.validate_refresh_token(refresh_token)
            if validated.is_err():
                # Persist reuse revocation / expired-row cleanup
                await self.uow.commit()
                return Return.err(validated.error)

            old_token = validated.value
            user_id = old_token.user_id

            details_result = await self.user_profile.get_auth_details_by_user_id(user_id)
            if details_result.is_err():
                if details_result.error.code == ErrorCode.NOT_FOUND:
                    return Return.err(INVALID_CREDENTIALS_ERROR)
                return Return.err(details_result.error)

            auth_details = details_result.value
            if auth_details.user_id != user_id:
                logger.warning(
                    f"Refresh token subject {user_id} does not match "
                    f"user service record {auth_details.user_id}"
                )
                return Return.err(INVALID_CREDENTIALS_ERROR)

            if auth_details.is_blocked:
                logger.warning(
                    f"Refresh refused for User [userId: '{user_id}'], "
                    f"status {auth_details.status.value}"
                )
                return Return.err(account_suspended_error(auth_details.status))

            session = await self.tokens.start_session(response, auth_details)
            if session.is_err():
                return Return.err(session.error)

            if not await self.uow.refresh_tokens.delete_by_id(old_token.id):
                logger.warning(
                    f"Refresh token [id: '{old_token.id}'] was rotated by a concurrent request"
                )
                return Return.err(INVALID_TOKEN_ERROR)

            await self.uow.commit()

        logger.info(
            f"Rotated refresh token for User [userId: '{user_id}']: "
            f"{old_token.id} -> {session.value}"
        )
        return Return.ok(None)
