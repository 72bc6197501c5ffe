"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    BLOCKED_USER_STATUSES,
    ErrorCode,
    TokenKind,
    UserStatus,
)

# Export all entities
from .password import Password
from .passcode import Passcode
from .reset_token import ResetToken
from .refresh_token import RefreshToken

__all__ = [
    # Enums
    "BLOCKED_USER_STATUSES",
    "ErrorCode",
    "TokenKind",
    "UserStatus",
    # Entities
    "Password",
    "Passcode",
    "ResetToken",
    "RefreshToken",
]
