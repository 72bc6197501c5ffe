"""
Use Cases

Use cases are organized into domain folders:
- auth/: Credential creation and the session lifecycle
- passcode/: Email verification passcodes
- password/: Password checks, reset and update
- data/: User data erasure
- maintenance/: Scheduled clean-up
"""

from .auth import (
    CreateCredentialsUseCase,
    CreateCredentialsCommand,
    LoginUseCase,
    LoginResponse,
    RefreshTokensUseCase,
    LogoutUseCase,
)
from .passcode import (
    VerifyPasscodeUseCase,
    ResetPasscodeUseCase,
)
from .password import (
    VerifyPasswordUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    UpdatePasswordUseCase,
)
from .data import DeleteUserAuthDataUseCase
from .maintenance import PurgeExpiredCredentialsUseCase, PurgeResult

__all__ = [
    # Auth
    "CreateCredentialsUseCase",
    "CreateCredentialsCommand",
    "LoginUseCase",
    "LoginResponse",
    "RefreshTokensUseCase",
    "LogoutUseCase",
    # Passcode
    "VerifyPasscodeUseCase",
    "ResetPasscodeUseCase",
    # Password
    "VerifyPasswordUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "UpdatePasswordUseCase",
    # Data
    "DeleteUserAuthDataUseCase",
    # Maintenance
    "PurgeExpiredCredentialsUseCase",
    "PurgeResult",
]
