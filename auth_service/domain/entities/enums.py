"""
Auth Service Domain Enums

Enumeration types shared across domain entities and use cases.
"""

from enum import Enum


class UserStatus(str, Enum):
    """Account status as reported by the user-profile service"""

    active = "ACTIVE"
    pending = "PENDING"
    suspended = "SUSPENDED"
    locked = "LOCKED"
    inactive = "INACTIVE"


# Statuses that must never be granted a session or a reset token
BLOCKED_USER_STATUSES = frozenset(
    {UserStatus.suspended, UserStatus.locked, UserStatus.inactive}
)


class TokenKind(str, Enum):
    """Bearer token class; each kind is signed with its own secret"""

    access = "access"
    refresh = "refresh"


class ErrorCode(str, Enum):
    """Error codes carried by libs.result.Error"""

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    PASSCODE_EXPIRED = "PASSCODE_EXPIRED"
    PASSCODE_INVALID = "PASSCODE_INVALID"
    RESET_TOKEN_INVALID = "RESET_TOKEN_INVALID"
    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    EMAIL_VERIFICATION_FAILED = "EMAIL_VERIFICATION_FAILED"
    TOKEN_GENERATION_FAILED = "TOKEN_GENERATION_FAILED"
    NOT_FOUND = "NOT_FOUND"

    def __str__(self) -> str:
        return self.value
