"""
Profile entity models.

Profiles mirror the backend's user profile rows: display identity used by
the leaderboard and inbox, plus the business verification state reviewed by
administrators.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class VerificationStatus(str, Enum):
    """Business verification review state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Profile(Base, table=True):
    """User profile.

    Table: profiles
    """

    __tablename__ = "profiles"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    full_name: Optional[str] = Field(default=None, description="Display name")
    first_name: Optional[str] = Field(default=None, description="Given name")
    last_name: Optional[str] = Field(default=None, description="Family name")
    email: Optional[str] = Field(default=None, description="Contact email")
    avatar_url: Optional[str] = Field(default=None, description="Avatar image URL")
    business_name: Optional[str] = Field(default=None, description="Business the member trades as")

    verification_status: str = Field(default=VerificationStatus.PENDING.value, description="Business verification state")
    admin_notes: Optional[str] = Field(default=None, description="Reviewer notes from the last verification decision")
    workspace_email: Optional[str] = Field(default=None, index=True, description="Provisioned workspace address")
    verified_at: Optional[datetime] = Field(
        default=None, description="When verification was approved", sa_type=DateTime
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"Profile(id={self.id}, full_name={self.full_name}, verification={self.verification_status})"
