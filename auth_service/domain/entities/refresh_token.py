"""
RefreshToken Entity

Server-side half of a refresh session.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - one row per issued session.

    Business Rules:
    - id equals the tokenId claim of the signed refresh token
    - Bound to its owner: looked up by (id, user_id)
    - Expires 7 days after issue
    - Deleted on logout, on rotation, on detected reuse or by the sweeper
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(nullable=False, index=True)

    expiry_date: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_refresh_token_expiry_date", "expiry_date"),)
