"""
Password Service

Verifies and stores bcrypt password hashes.
"""

import logging
from uuid import UUID

import bcrypt

from libs.result import Error, Result, Return
from auth_service.app.services.unit_of_work import UnitOfWork
from auth_service.domain.base import utcnow
from auth_service.domain.entities import ErrorCode, Password

logger = logging.getLogger(__name__)

BCRYPT_COST = 12

# bcrypt only reads the first 72 bytes and newer releases reject anything longer
MAX_PASSWORD_BYTES = 72

# Used to keep response time flat when there is no hash to compare with
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(BCRYPT_COST))


def exceeds_password_limit(plaintext: str) -> bool:
    return len(plaintext.encode()) > MAX_PASSWORD_BYTES


def check_password_length(password: str) -> str:
    """pydantic validator for passwords that will be hashed"""
    if exceeds_password_limit(password):
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


def hash_password(plaintext: str) -> str:
    return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(BCRYPT_COST)).decode()


def burn_password_check(plaintext: str) -> None:
    """Run a bcrypt comparison whose result is ignored"""
    bcrypt.checkpw(plaintext.encode()[:MAX_PASSWORD_BYTES], _DUMMY_HASH)


class PasswordService:
    """
    Password credential operations.

    Business Rules:
    - One password row per user, replaced in place
    - Hashes use bcrypt (cost factor 12) with constant-time comparison
    - A missing row (NOT_FOUND) is distinct from a wrong password
      (INVALID_CREDENTIALS); callers facing clients collapse both
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def verify(self, user_id: UUID, plaintext: str) -> Result[None]:
        logger.info(f"Verifying Password for User [userId: '{user_id}']")
        password = await self.uow.passwords.get_by_user_id(user_id)

        if password is None:
            burn_password_check(plaintext)
            return Return.err(
                Error(ErrorCode.NOT_FOUND, f"Password for user {user_id} not found")
            )

        if exceeds_password_limit(plaintext):
            # No stored hash can match a password that could not have been hashed
            burn_password_check(plaintext)
            logger.warning(f"Password for User [userId: '{user_id}'] exceeds {MAX_PASSWORD_BYTES} bytes")
            return Return.err(
                Error(ErrorCode.INVALID_CREDENTIALS, "Invalid credentials")
            )

        if not bcrypt.checkpw(plaintext.encode(), password.password_hash.encode()):
            return Return.err(
                Error(ErrorCode.INVALID_CREDENTIALS, "Invalid credentials")
            )

        return Return.ok(None)

    async def create_or_replace(self, user_id: UUID, plaintext: str) -> Password:
        logger.info(f"Storing Password for User [userId: '{user_id}']")
        password_hash = hash_password(plaintext)

        def apply(password: Password) -> None:
            password.password_hash = password_hash
            password.last_updated = utcnow()

        return await self.uow.passwords.upsert(user_id, apply)

    async def delete_for_user(self, user_id: UUID) -> int:
        logger.info(f"Deleting Passwords for User [userId: '{user_id}']")
        return await self.uow.passwords.delete_by_user_id(user_id)
