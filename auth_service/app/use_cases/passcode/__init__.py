"""
Passcode Use Cases

Email verification by one-time passcode.
"""

from .verify_passcode_use_case import VerifyPasscodeUseCase
from .reset_passcode_use_case import ResetPasscodeUseCase

__all__ = [
    "VerifyPasscodeUseCase",
    "ResetPasscodeUseCase",
]
