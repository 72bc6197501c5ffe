"""
Login Use Case

Authenticates a user and opens a new cookie-based session.
"""

import logging

from fastapi import Response

from libs.result import Result, Return
from auth_service.app.services.password_service import PasswordService, burn_password_check
from auth_service.app.services.session_token_service import SessionTokenService, TokenSettings
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.app.use_cases.common import INVALID_CREDENTIALS_ERROR, account_suspended_error
from auth_service.domain.entities import ErrorCode
from .dtos import LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown email and wrong password return the same INVALID_CREDENTIALS
      error, with a bcrypt comparison on both paths
    - Suspended, locked and inactive accounts are refused before the
      password is looked at
    - Success creates a RefreshToken row and sets both auth cookies
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_settings: TokenSettings,
        user_profile: IUserProfileClient,
    ):
        self.uow = uow
        self.user_profile = user_profile
        self.passwords = PasswordService(uow)
        self.tokens = SessionTokenService(token_settings, uow)

    async def execute(
        self, email: str, password: str, response: Response
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            response: Outgoing response that receives the auth cookies

        Returns:
            Result with LoginResponse, or Error
        """
        logger.info(f"Authenticating User [email: {email}]")

        async with self.uow:
            details_result = await self.user_profile.get_auth_details_by_email(email)
            if details_result.is_err():
                if details_result.error.code == ErrorCode.NOT_FOUND:
                    # Keep timing identical to the wrong-password path
                    burn_password_check(password)
                    return Return.err(INVALID_CREDENTIALS_ERROR)
                return Return.err(details_result.error)

            auth_details = details_result.value
            if auth_details.is_blocked:
                logger.warning(
                    f"Login refused for User [userId: '{auth_details.user_id}'], "
                    f"status {auth_details.status.value}"
                )
                return Return.err(account_suspended_error(auth_details.status))

            verified = await self.passwords.verify(auth_details.user_id, password)
            if verified.is_err():
                if verified.error.code in (ErrorCode.NOT_FOUND, ErrorCode.INVALID_CREDENTIALS):
                    return Return.err(INVALID_CREDENTIALS_ERROR)
                return Return.err(verified.error)

            session = await self.tokens.start_session(response, auth_details)
            if session.is_err():
                return Return.err(session.error)

            await self.uow.commit()

        return Return.ok(
            LoginResponse(
                user_id=str(auth_details.user_id),
                roles=auth_details.roles,
                authorities=auth_details.authorities,
            )
        )
