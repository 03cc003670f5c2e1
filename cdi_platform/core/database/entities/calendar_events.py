"""
Calendar event entity models.

Calendar events are queued locally as ``pending`` and pushed to the team
member's Google Calendar by the ``sync-calendar-events`` edge function, which
writes back the remote event id and sync status.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class SyncStatus(str, Enum):
    """Remote calendar synchronization state."""

    PENDING = "pending"
    SYNCED = "synced"
    FAILED = "failed"
    CANCELLED = "cancelled"
    DELETED = "deleted"


class CalendarEvent(Base, table=True):
    """Scheduled work block for a team member.

    Table: calendar_events
    """

    __tablename__ = "calendar_events"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    business_id: str = Field(index=True)
    team_member_id: str = Field(index=True)
    task_assignment_id: Optional[str] = Field(default=None)
    estimate_id: Optional[str] = Field(default=None, index=True)
    batch_invitation_id: Optional[str] = Field(default=None)

    google_calendar_id: Optional[str] = Field(default=None, description="Calendar the event is pushed to")
    google_event_id: Optional[str] = Field(default=None, description="Remote event id once synced")

    event_title: str
    event_description: Optional[str] = Field(default=None)
    event_location: Optional[str] = Field(default=None)
    start_datetime: datetime = Field(sa_type=DateTime)
    end_datetime: datetime = Field(sa_type=DateTime)
    all_day: bool = Field(default=False)

    sync_status: str = Field(default=SyncStatus.PENDING.value, index=True)
    sync_error: Optional[str] = Field(default=None)
    last_sync_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"CalendarEvent(id={self.id}, title={self.event_title}, sync={self.sync_status})"
