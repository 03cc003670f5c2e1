"""
Business team repositories.

Businesses, team members, estimates and the task assignments offered to
members from estimate line items.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.teams import Business, Estimate, TaskAssignment, TeamMember
from .base import SqlModelRepository


class BusinessRepository(SqlModelRepository[Business]):
    """Repository for businesses."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Business)


class TeamMemberRepository(SqlModelRepository[TeamMember]):
    """Repository for team members."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TeamMember)

    async def get_by_user_id(self, user_id: str) -> Optional[TeamMember]:
        """Find the team member record linked to a login profile.

        Args:
            user_id: Profile id

        Returns:
            First matching team member or None
        """
        stmt = select(TeamMember).where(TeamMember.user_id == user_id).order_by(TeamMember.created_at).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class EstimateRepository(SqlModelRepository[Estimate]):
    """Repository for estimates."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Estimate)


class TaskAssignmentRepository(SqlModelRepository[TaskAssignment]):
    """Repository for task assignments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TaskAssignment)

    async def list_for_member(self, team_member_id: str) -> List[TaskAssignment]:
        """List a member's assignments, most recent invitation first."""
        stmt = (
            select(TaskAssignment)
            .where(TaskAssignment.team_member_id == team_member_id)
            .order_by(TaskAssignment.invited_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_batch(self, batch_invitation_id: str) -> List[TaskAssignment]:
        """List assignments bundled into a batched invitation."""
        stmt = (
            select(TaskAssignment)
            .where(TaskAssignment.batch_invitation_id == batch_invitation_id)
            .order_by(TaskAssignment.invited_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def set_status_for_batch(self, batch_invitation_id: str, status: str, responded_at: datetime) -> None:
        """Apply a response to every assignment in a batch.

        The change is staged on the session only; the caller commits it
        together with the batch itself.

        Args:
            batch_invitation_id: Batch whose assignments are updated
            status: New assignment status
            responded_at: Response timestamp
        """
        stmt = (
            update(TaskAssignment)
            .where(TaskAssignment.batch_invitation_id == batch_invitation_id)
            .values(status=status, responded_at=responded_at)
        )
        await self.session.execute(stmt)
