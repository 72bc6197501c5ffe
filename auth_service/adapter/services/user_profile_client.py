"""
HTTP client for the user-profile service.

Every transport error, timeout and non-2xx response is logged and
translated into a Result error; nothing raised by httpx escapes.
"""

import logging
from typing import Optional
from uuid import UUID

import httpx
from pydantic import ValidationError

from libs.result import Error, Result, Return
from auth_service.app.services.dtos import AuthDetails, UserInfo
from auth_service.app.services.user_profile_client import IUserProfileClient
from auth_service.domain.entities import ErrorCode

logger = logging.getLogger(__name__)

USER_RETRIEVAL_FAILED = Error(
    ErrorCode.UPSTREAM_UNAVAILABLE, "Failed to retrieve user, please try again later"
)
EMAIL_VERIFICATION_FAILED = Error(
    ErrorCode.EMAIL_VERIFICATION_FAILED, "Failed to verify email, please try again later"
)


class HttpUserProfileClient(IUserProfileClient):
    """IUserProfileClient over a shared httpx.AsyncClient"""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_auth_details_by_email(self, email: str) -> Result[AuthDetails]:
        response = await self._request(
            "GET", "/user/auth-details/by-email", params={"email": email}
        )
        return self._parse(response, AuthDetails, f"email '{email}'")

    async def get_auth_details_by_user_id(self, user_id: UUID) -> Result[AuthDetails]:
        response = await self._request(
            "GET", "/user/auth-details/by-userid", params={"userId": str(user_id)}
        )
        return self._parse(response, AuthDetails, f"user id '{user_id}'")

    async def get_user(self, user_id: UUID) -> Result[UserInfo]:
        response = await self._request("GET", f"/user/{user_id}")
        return self._parse(response, UserInfo, f"user id '{user_id}'")

    async def verify_user_email(self, user_id: UUID) -> Result[None]:
        response = await self._request("PATCH", f"/user/{user_id}/verify")
        if response is None or response.is_error:
            self._log_failure("verifying User email", f"user id '{user_id}'", response)
            return Return.err(EMAIL_VERIFICATION_FAILED)
        return Return.ok(None)

    async def _request(self, method: str, url: str, **kwargs) -> Optional[httpx.Response]:
        try:
            return await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"User service request {method} {url} failed: {exc!r}")
            return None

    def _parse(self, response: Optional[httpx.Response], model, subject: str) -> Result:
        if response is None:
            return Return.err(USER_RETRIEVAL_FAILED)

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(f"User service has no user with {subject}")
            return Return.err(Error(ErrorCode.NOT_FOUND, "User not found"))

        if response.is_error:
            self._log_failure("getting User", subject, response)
            return Return.err(USER_RETRIEVAL_FAILED)

        try:
            return Return.ok(model.model_validate(response.json()))
        except (ValueError, ValidationError) as exc:
            logger.error(f"Malformed user service response for {subject}: {exc}")
            return Return.err(USER_RETRIEVAL_FAILED)

    @staticmethod
    def _log_failure(action: str, subject: str, response: Optional[httpx.Response]) -> None:
        if response is None:
            logger.error(f"User service unreachable when {action}: {subject}")
            return
        logger.error(
            f"User service error when {action}: {subject}, "
            f"Status {response.status_code}, Body {response.text}"
        )
