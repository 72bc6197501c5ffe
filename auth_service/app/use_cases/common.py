"""
Helpers shared by the use cases: client-facing errors and the
translation of user-profile lookups into them.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from auth_service.app.services.dtos import UserInfo
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.domain.entities import ErrorCode, UserStatus

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_ERROR = Error(ErrorCode.INVALID_CREDENTIALS, "Invalid email or password")

USER_RETRIEVAL_FAILED_ERROR = Error(
    ErrorCode.UPSTREAM_UNAVAILABLE, "Failed to retrieve user, please try again later"
)


def account_suspended_error(status: UserStatus) -> Error:
    return Error(
        ErrorCode.ACCOUNT_SUSPENDED,
        f"User account is {status.value.lower()} and cannot be accessed",
    )


async def fetch_user_info(client: IUserProfileClient, user_id: UUID) -> Result[UserInfo]:
    """
    Get profile info for notification personalisation.

    The user is expected to exist upstream, so NOT_FOUND is reported as a
    retrieval failure rather than leaked to the client.
    """
    result = await client.get_user(user_id)
    if result.is_err() and result.error.code == ErrorCode.NOT_FOUND:
        logger.error(f"User service has no profile for User [userId: '{user_id}']")
        return Return.err(USER_RETRIEVAL_FAILED_ERROR)
    return result
