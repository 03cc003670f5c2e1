"""
Calendar Sync Endpoints.

Queue team calendar events and push them to Google Calendar through the
sync edge function.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from cdi_platform.core.database.entities.calendar_events import CalendarEvent
from cdi_platform.services.calendar import NewCalendarEvent, SyncResult, SyncStats
from cdi_platform.server.deps import CalendarDep
from cdi_platform.server.schemas import EventStatusUpdate

router = APIRouter()


@router.get(
    "/events/pending",
    response_model=List[CalendarEvent],
    summary="List Pending Events",
    description="Events waiting to be synced, oldest first.",
    response_description="Pending events.",
)
async def list_pending(
    service: CalendarDep, business_id: Optional[str] = Query(default=None, description="Restrict to one business")
) -> List[CalendarEvent]:
    return await service.get_pending_events(business_id)


@router.get(
    "/estimates/{estimate_id}/events",
    response_model=List[CalendarEvent],
    summary="List Estimate Events",
    description="Every calendar event scheduled for an estimate.",
    response_description="Events ordered by start.",
)
async def list_estimate_events(estimate_id: str, service: CalendarDep) -> List[CalendarEvent]:
    return await service.get_estimate_events(estimate_id)


@router.get(
    "/team-members/{team_member_id}/events",
    response_model=List[CalendarEvent],
    summary="List Team Member Events",
    description="A team member's pending and synced events, ordered by start.",
    response_description="Live events.",
)
async def list_member_events(team_member_id: str, service: CalendarDep) -> List[CalendarEvent]:
    return await service.get_team_member_events(team_member_id)


@router.post(
    "/events",
    response_model=CalendarEvent,
    status_code=status.HTTP_201_CREATED,
    summary="Create Event",
    description="Queue an event on the team member's calendar and trigger a sync.",
    response_description="The queued event.",
    responses={404: {"description": "Team member not found"}},
)
async def create_event(body: NewCalendarEvent, service: CalendarDep) -> CalendarEvent:
    return await service.create_event(body)


@router.post(
    "/sync",
    response_model=SyncResult,
    summary="Sync Pending Events",
    description="Push every pending event through the sync function.",
    response_description="Synced and failed counts.",
)
async def sync(
    service: CalendarDep, business_id: Optional[str] = Query(default=None, description="Restrict to one business")
) -> SyncResult:
    return await service.sync_pending_events(business_id)


@router.post(
    "/sync/retry-failed",
    response_model=SyncResult,
    summary="Retry Failed Events",
    description="Reset failed events to pending and sync again.",
    response_description="Synced and failed counts.",
)
async def retry_failed(
    service: CalendarDep, business_id: Optional[str] = Query(default=None, description="Restrict to one business")
) -> SyncResult:
    return await service.retry_failed_events(business_id)


@router.patch(
    "/events/{event_id}/status",
    response_model=CalendarEvent,
    summary="Update Event Sync Status",
    description="Record the outcome of a sync attempt.",
    response_description="The updated event.",
    responses={404: {"description": "Event not found"}},
)
async def update_status(event_id: str, body: EventStatusUpdate, service: CalendarDep) -> CalendarEvent:
    return await service.update_event_status(event_id, body.status, body.google_event_id, body.error)


@router.post(
    "/events/{event_id}/cancel",
    response_model=CalendarEvent,
    summary="Cancel Event",
    description="Cancel an event and remove it from Google Calendar if it was synced.",
    response_description="The cancelled event.",
    responses={404: {"description": "Event not found"}},
)
async def cancel_event(event_id: str, service: CalendarDep) -> CalendarEvent:
    return await service.cancel_event(event_id)


@router.get(
    "/businesses/{business_id}/stats",
    response_model=SyncStats,
    summary="Get Sync Stats",
    description="Event counts per sync status for a business.",
    response_description="Totals.",
)
async def sync_stats(business_id: str, service: CalendarDep) -> SyncStats:
    return await service.get_sync_stats(business_id)
