"""
Calendar event repository.

Queue queries used by the calendar sync service.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.calendar_events import CalendarEvent, SyncStatus
from .base import SqlModelRepository


class CalendarEventRepository(SqlModelRepository[CalendarEvent]):
    """Repository for calendar events."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CalendarEvent)

    async def list_pending(self, business_id: Optional[str] = None) -> List[CalendarEvent]:
        """List events waiting to be pushed, oldest first.

        Args:
            business_id: Restrict to one business; None for every business

        Returns:
            Pending events
        """
        stmt = select(CalendarEvent).where(CalendarEvent.sync_status == SyncStatus.PENDING.value)
        if business_id:
            stmt = stmt.where(CalendarEvent.business_id == business_id)
        stmt = stmt.order_by(CalendarEvent.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_estimate(self, estimate_id: str) -> List[CalendarEvent]:
        stmt = (
            select(CalendarEvent)
            .where(CalendarEvent.estimate_id == estimate_id)
            .order_by(CalendarEvent.start_datetime)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_team_member(self, team_member_id: str) -> List[CalendarEvent]:
        """List a member's live events (pending or synced) by start time."""
        stmt = (
            select(CalendarEvent)
            .where(
                (CalendarEvent.team_member_id == team_member_id)
                & (CalendarEvent.sync_status.in_([SyncStatus.PENDING.value, SyncStatus.SYNCED.value]))
            )
            .order_by(CalendarEvent.start_datetime)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self, business_id: Optional[str] = None) -> Dict[str, int]:
        """Count events per sync status.

        Args:
            business_id: Restrict to one business; None for every business

        Returns:
            Mapping of sync status to event count
        """
        stmt = select(CalendarEvent.sync_status, func.count()).group_by(CalendarEvent.sync_status)
        if business_id:
            stmt = stmt.where(CalendarEvent.business_id == business_id)
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}

    async def reset_failed(self, business_id: Optional[str] = None) -> None:
        """Put failed events back in the pending queue and clear their errors."""
        stmt = (
            update(CalendarEvent)
            .where(CalendarEvent.sync_status == SyncStatus.FAILED.value)
            .values(sync_status=SyncStatus.PENDING.value, sync_error=None)
        )
        if business_id:
            stmt = stmt.where(CalendarEvent.business_id == business_id)
        await self.session.execute(stmt)
        await self.session.commit()
