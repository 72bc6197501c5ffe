"""
Service DTOs (Data Transfer Objects)

Shapes exchanged with the user-profile service and the email pipeline.
Field aliases match the camelCase JSON used on the wire.
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from auth_service.domain.entities import BLOCKED_USER_STATUSES, UserStatus


class AuthDetails(BaseModel):
    """Identity and authorization snapshot of a user"""

    model_config = ConfigDict(populate_by_name=True)

    user_id: UUID = Field(..., alias="userId")
    roles: List[str] = Field(default_factory=list)
    authorities: List[str] = Field(default_factory=list)
    status: UserStatus

    @property
    def is_blocked(self) -> bool:
        return self.status in BLOCKED_USER_STATUSES


class UserInfo(BaseModel):
    """Profile data used to personalise notification emails"""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str


# ============================================================================
# Notification messages
# ============================================================================


class EmailMessage(BaseModel):
    """Base class of messages consumed by the mailer"""

    model_config = ConfigDict(populate_by_name=True)

    kind: str
    first_name: str = Field(..., alias="firstName")
    email: str


class VerificationEmail(EmailMessage):
    """Carries a fresh passcode for email verification"""

    kind: str = "verify"
    passcode: str


class WelcomeEmail(EmailMessage):
    """Sent once the email address has been verified"""

    kind: str = "welcome"


class ResetPasswordEmail(EmailMessage):
    """Carries the password-reset token"""

    kind: str = "reset"
    token: str
