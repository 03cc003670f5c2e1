"""Google Calendar sync.

Events are queued in ``calendar_events`` as ``pending``; the
``sync-calendar-events`` edge function owns the OAuth tokens, pushes the
queue to each team member's calendar and writes the results back.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities.calendar_events import CalendarEvent, SyncStatus
from cdi_platform.core.database.repositories.bundle import RepositoryBundle
from cdi_platform.core.errors import NotFoundError
from cdi_platform.core.monitoring import log_notification
from cdi_platform.edge_functions import EdgeFunctionClient, EdgeFunctionError

logger = logging.getLogger(__name__)


class SyncResult(BaseModel):
    success: bool
    synced: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


class SyncStats(BaseModel):
    total: int = 0
    pending: int = 0
    synced: int = 0
    failed: int = 0


class NewCalendarEvent(BaseModel):
    """Work block to schedule on a team member's calendar."""

    team_member_id: str
    estimate_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_datetime: datetime
    end_datetime: datetime
    all_day: bool = False


class CalendarService:
    """Queue, sync and cancel team calendar events."""

    def __init__(self, repos: RepositoryBundle, edge: EdgeFunctionClient) -> None:
        self.repos = repos
        self.edge = edge

    async def get_pending_events(self, business_id: Optional[str] = None) -> List[CalendarEvent]:
        return await self.repos.calendar_events.list_pending(business_id)

    async def get_estimate_events(self, estimate_id: str) -> List[CalendarEvent]:
        return await self.repos.calendar_events.list_for_estimate(estimate_id)

    async def get_team_member_events(self, team_member_id: str) -> List[CalendarEvent]:
        return await self.repos.calendar_events.list_for_team_member(team_member_id)

    async def sync_pending_events(self, business_id: Optional[str] = None) -> SyncResult:
        """Push every pending event through the sync function.

        Returns:
            Counts reported by the function, or every event counted as failed
            when the function call itself fails
        """
        pending = await self.get_pending_events(business_id)
        if not pending:
            return SyncResult(success=True)

        try:
            response = await self.edge.sync_calendar_events([event.id for event in pending])
        except EdgeFunctionError as e:
            logger.error(f"Error syncing calendar events: {e}")
            log_notification("calendar", "sync", False, str(e))
            return SyncResult(success=False, failed=len(pending), errors=[str(e)])

        log_notification("calendar", "sync", response.failed == 0)
        logger.info(f"Calendar sync: {response.synced} synced, {response.failed} failed")
        return SyncResult(
            success=response.failed == 0,
            synced=response.synced,
            failed=response.failed,
            errors=response.errors,
        )

    async def retry_failed_events(self, business_id: Optional[str] = None) -> SyncResult:
        await self.repos.calendar_events.reset_failed(business_id)
        return await self.sync_pending_events(business_id)

    async def update_event_status(
        self,
        event_id: str,
        status: SyncStatus,
        google_event_id: Optional[str] = None,
        error: Optional[str] = None,
    ) -> CalendarEvent:
        event = await self.repos.calendar_events.get_by_id(event_id)
        if event is None:
            raise NotFoundError("Calendar event", event_id)

        now = utc_now()
        event.sync_status = SyncStatus(status).value
        event.last_sync_at = now
        event.updated_at = now
        if google_event_id:
            event.google_event_id = google_event_id
        if error:
            event.sync_error = error
        return await self.repos.calendar_events.update(event)

    async def cancel_event(self, event_id: str) -> CalendarEvent:
        """Cancel an event locally, then remove it from Google if it was synced.

        The remote delete is best effort; the local cancellation stands even
        if it fails.
        """
        event = await self.update_event_status(event_id, SyncStatus.CANCELLED)
        if event.google_event_id and event.google_calendar_id:
            try:
                await self.edge.delete_calendar_event(event.google_calendar_id, event.google_event_id)
            except EdgeFunctionError as e:
                logger.warning(f"Error deleting Google Calendar event {event.google_event_id}: {e}")
        return event

    async def create_event(self, data: NewCalendarEvent) -> CalendarEvent:
        """Queue an event on the member's calendar and trigger a sync.

        The member's email is used as the Google calendar id.
        """
        member = await self.repos.team_members.get_by_id(data.team_member_id)
        if member is None:
            raise NotFoundError("Team member", data.team_member_id)

        event = await self.repos.calendar_events.create(
            CalendarEvent(
                business_id=member.business_id,
                team_member_id=member.id,
                estimate_id=data.estimate_id,
                google_calendar_id=member.email,
                event_title=data.title,
                event_description=data.description,
                event_location=data.location,
                start_datetime=data.start_datetime,
                end_datetime=data.end_datetime,
                all_day=data.all_day,
                sync_status=SyncStatus.PENDING.value,
            )
        )
        await self.sync_pending_events(member.business_id)
        return event

    async def get_sync_stats(self, business_id: str) -> SyncStats:
        counts = await self.repos.calendar_events.count_by_status(business_id)
        return SyncStats(
            total=sum(counts.values()),
            pending=counts.get(SyncStatus.PENDING.value, 0),
            synced=counts.get(SyncStatus.SYNCED.value, 0),
            failed=counts.get(SyncStatus.FAILED.value, 0),
        )
