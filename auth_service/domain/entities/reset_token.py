"""
ResetToken Entity

Opaque bearer string mailed out for forgotten passwords.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class ResetToken(SQLModel, table=True):
    """
    ResetToken entity - one row per user.

    Business Rules:
    - 20-char lowercase alphanumeric token
    - Looked up by token value and by user id
    - Expires 15 minutes after issue
    - Deleted after a successful password reset or by the sweeper
    """

    __tablename__ = "reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(nullable=False, unique=True, index=True)
    token: str = Field(max_length=20, unique=True, index=True)

    expiry_date: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_reset_token_expiry_date", "expiry_date"),)
