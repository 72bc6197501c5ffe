"""
Random credential generation.

Both generators draw from the ``secrets`` CSPRNG.
"""

import secrets
import string

# Excludes 0, O, I and 1
PASSCODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
PASSCODE_LENGTH = 6

RESET_TOKEN_ALPHABET = string.ascii_lowercase + string.digits
RESET_TOKEN_LENGTH = 20


class TokenCodec:
    """Generates one-time passcodes and opaque password-reset tokens"""

    @staticmethod
    def generate_passcode() -> str:
        return "".join(
            secrets.choice(PASSCODE_ALPHABET) for _ in range(PASSCODE_LENGTH)
        )

    @staticmethod
    def generate_reset_token() -> str:
        return "".join(
            secrets.choice(RESET_TOKEN_ALPHABET) for _ in range(RESET_TOKEN_LENGTH)
        )
