from abc import ABC, abstractmethod
from uuid import UUID

from libs.result import Result
from .dtos import AuthDetails, UserInfo


class IUserProfileClient(ABC):
    """
    User-profile service interface - application layer.

    Implementations never raise transport errors: a missing user is
    reported as NOT_FOUND, every other failure as UPSTREAM_UNAVAILABLE
    (EMAIL_VERIFICATION_FAILED for verify_user_email).
    """

    @abstractmethod
    async def get_auth_details_by_email(self, email: str) -> Result[AuthDetails]:
        """Get auth details of the user registered with an email"""
        pass

    @abstractmethod
    async def get_auth_details_by_user_id(self, user_id: UUID) -> Result[AuthDetails]:
        """Get auth details of a user"""
        pass

    @abstractmethod
    async def get_user(self, user_id: UUID) -> Result[UserInfo]:
        """Get profile info of a user"""
        pass

    @abstractmethod
    async def verify_user_email(self, user_id: UUID) -> Result[None]:
        """Mark the user's email address as verified"""
        pass
