"""
Profile repository.

Data access for member profiles, including the lookups used when
provisioning workspace accounts during business verification.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.profiles import Profile
from .base import SqlModelRepository


class ProfileRepository(SqlModelRepository[Profile]):
    """Repository for profile data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Profile)

    async def get_by_workspace_email(self, workspace_email: str) -> Optional[Profile]:
        """Find the profile that already holds a workspace address.

        Args:
            workspace_email: Address to look up

        Returns:
            Profile instance or None
        """
        stmt = select(Profile).where(Profile.workspace_email == workspace_email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
