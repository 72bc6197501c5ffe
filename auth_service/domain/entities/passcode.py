"""
Passcode Entity

Short one-time code proving control of an email address.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class Passcode(SQLModel, table=True):
    """
    Passcode entity - one row per user.

    Business Rules:
    - 6 characters, alphabet excludes 0/O/I/1
    - Recreated (same row, new code) on every reset request
    - Expires 15 minutes after issue
    - Deleted on successful verification or by the sweeper
    """

    __tablename__ = "passcodes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(nullable=False, unique=True, index=True)
    passcode: str = Field(max_length=6)

    expiry_date: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_passcode_expiry_date", "expiry_date"),)
