"""
Password Entity

Bcrypt hash of a user's password.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from auth_service.domain.base import utcnow


class Password(SQLModel, table=True):
    """
    Password entity - one row per user.

    Business Rules:
    - Created on first credential submission
    - Overwritten in place on reset/update (same row, new hash)
    - Never expires
    """

    __tablename__ = "passwords"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(nullable=False, unique=True, index=True)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    last_updated: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )
