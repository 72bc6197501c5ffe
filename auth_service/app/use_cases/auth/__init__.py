"""
Authentication Use Cases

Credential creation and the session lifecycle: login, refresh, logout.
"""

from .create_credentials_use_case import CreateCredentialsUseCase
from .login_use_case import LoginUseCase
from .refresh_tokens_use_case import RefreshTokensUseCase
from .logout_use_case import LogoutUseCase
from .dtos import CreateCredentialsCommand, LoginResponse

__all__ = [
    # Use Cases
    "CreateCredentialsUseCase",
    "LoginUseCase",
    "RefreshTokensUseCase",
    "LogoutUseCase",
    # DTOs - Commands
    "CreateCredentialsCommand",
    # DTOs - Responses
    "LoginResponse",
]
