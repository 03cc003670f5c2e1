"""
Batched invitation repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.teams import BatchedInvitation, InvitationStatus
from .base import SqlModelRepository


class BatchedInvitationRepository(SqlModelRepository[BatchedInvitation]):
    """Repository for batched team invitations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, BatchedInvitation)

    async def get_open_for_member(self, business_id: str, team_member_id: str) -> Optional[BatchedInvitation]:
        """Find the batch still collecting tasks for a member.

        Only ``pending`` batches accept new tasks; once sent a new batch is
        started for the next round.

        Args:
            business_id: Owning business
            team_member_id: Invited member

        Returns:
            Newest pending batch or None
        """
        stmt = (
            select(BatchedInvitation)
            .where(
                (BatchedInvitation.business_id == business_id)
                & (BatchedInvitation.team_member_id == team_member_id)
                & (BatchedInvitation.status == InvitationStatus.PENDING.value)
            )
            .order_by(BatchedInvitation.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_token(self, token: str) -> Optional[BatchedInvitation]:
        stmt = select(BatchedInvitation).where(BatchedInvitation.invitation_token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_business(self, business_id: str) -> List[BatchedInvitation]:
        """List a business's invitations, newest first."""
        stmt = (
            select(BatchedInvitation)
            .where(BatchedInvitation.business_id == business_id)
            .order_by(BatchedInvitation.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
