"""
Password Use Cases

Password checks, the forgot/reset flow and authenticated updates.
"""

from .verify_password_use_case import VerifyPasswordUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .update_password_use_case import UpdatePasswordUseCase

__all__ = [
    "VerifyPasswordUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "UpdatePasswordUseCase",
]
