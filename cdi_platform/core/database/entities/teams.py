"""
Business team entity models.

A business owns estimates and a roster of team members. Estimate line items
are offered to members as task assignments, which are bundled per member
into batched invitations so a member receives one message per round of work.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class AssignmentStatus(str, Enum):
    """State of a task offered to a team member."""

    INVITED = "invited"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    COMPLETED = "completed"


class InvitationStatus(str, Enum):
    """State of a batched invitation."""

    PENDING = "pending"
    SENT = "sent"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class Business(Base, table=True):
    """Contracting business.

    Table: businesses
    """

    __tablename__ = "businesses"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    owner_id: Optional[str] = Field(default=None, description="Profile id of the owner")
    name: str
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"Business(id={self.id}, name={self.name})"


class TeamMember(Base, table=True):
    """Member of a business team.

    Table: team_members
    """

    __tablename__ = "team_members"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    business_id: str = Field(index=True)
    user_id: Optional[str] = Field(default=None, index=True, description="Linked login profile")
    first_name: str
    last_name: str = Field(default="")
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"TeamMember(id={self.id}, name={self.full_name}, business_id={self.business_id})"


class Estimate(Base, table=True):
    """Project estimate prepared by a business.

    Table: estimates
    """

    __tablename__ = "estimates"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    business_id: str = Field(index=True)
    project_name: str
    client_name: Optional[str] = Field(default=None)
    zip_code: Optional[str] = Field(default=None)
    total: float = Field(default=0.0)
    # Stored as JSON string for portability
    line_items: str = Field(default="[]", description="JSON array of line item objects")

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def get_line_items(self) -> List[Dict[str, Any]]:
        """Get line items as a list of dictionaries."""
        try:
            return json.loads(self.line_items) if self.line_items else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_line_items(self, items: List[Dict[str, Any]]) -> None:
        """Set line items from a list of dictionaries."""
        self.line_items = json.dumps(items)

    def __repr__(self) -> str:
        return f"Estimate(id={self.id}, project={self.project_name}, total={self.total})"


class TaskAssignment(Base, table=True):
    """Estimate line item offered to a team member.

    Table: task_assignments
    """

    __tablename__ = "task_assignments"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    estimate_id: str = Field(index=True)
    team_member_id: str = Field(index=True)
    batch_invitation_id: Optional[str] = Field(default=None, index=True)
    line_item_index: int = Field(default=0)
    line_item_description: str = Field(default="")
    line_item_cost: float = Field(default=0.0)
    assigned_cost: float = Field(default=0.0, description="Pay offered to the member")
    status: str = Field(default=AssignmentStatus.INVITED.value, index=True)
    invited_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    responded_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"TaskAssignment(id={self.id}, member={self.team_member_id}, status={self.status})"


class BatchedInvitation(Base, table=True):
    """Bundle of task assignments sent to one member in one message.

    Table: batched_invitations
    """

    __tablename__ = "batched_invitations"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    business_id: str = Field(index=True)
    team_member_id: str = Field(index=True)
    invitation_token: str = Field(unique=True, index=True, description="64 hex characters")
    total_tasks: int = Field(default=0)
    total_amount: float = Field(default=0.0)
    status: str = Field(default=InvitationStatus.PENDING.value)
    expires_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    sent_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    responded_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    email_sent: bool = Field(default=False)
    sms_sent: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"BatchedInvitation(id={self.id}, member={self.team_member_id}, status={self.status})"
