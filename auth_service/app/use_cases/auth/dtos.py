"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the auth domain.
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class CreateCredentialsCommand(BaseModel):
    """Initial credentials of a freshly registered user"""

    user_id: UUID
    first_name: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for user login use case; tokens travel in cookies"""

    user_id: str
    roles: List[str]
    authorities: List[str]
