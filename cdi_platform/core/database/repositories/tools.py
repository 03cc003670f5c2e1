"""
Tool rental repositories.

Inventory, rent-to-own agreements and repair tickets.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.tools import ToolInventory, ToolRentalAgreement, ToolRepair, ToolStatus
from .base import SqlModelRepository


class ToolInventoryRepository(SqlModelRepository[ToolInventory]):
    """Repository for the shared tool inventory."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ToolInventory)

    async def list_upgrade_candidates(self, category: str, min_retail_price: float, limit: int = 5) -> List[ToolInventory]:
        """List available tools in a category priced at or above a floor.

        Args:
            category: Tool category to match
            min_retail_price: Inclusive lower bound on retail price
            limit: Maximum tools returned

        Returns:
            Tools ordered cheapest first
        """
        stmt = (
            select(ToolInventory)
            .where(
                (ToolInventory.current_status == ToolStatus.AVAILABLE.value)
                & (ToolInventory.category == category)
                & (ToolInventory.retail_price >= min_retail_price)
            )
            .order_by(ToolInventory.retail_price)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_available(self, term: str = "") -> List[ToolInventory]:
        """Search available tools by model, brand or category, case-insensitively.

        Args:
            term: Substring to match; empty lists every available tool

        Returns:
            Matching tools ordered by category then model
        """
        stmt = select(ToolInventory).where(ToolInventory.current_status == ToolStatus.AVAILABLE.value)
        if term:
            pattern = f"%{term.lower()}%"
            stmt = stmt.where(
                or_(
                    ToolInventory.model.ilike(pattern),
                    ToolInventory.brand.ilike(pattern),
                    ToolInventory.category.ilike(pattern),
                )
            )
        stmt = stmt.order_by(ToolInventory.category, ToolInventory.model)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ToolRentalAgreementRepository(SqlModelRepository[ToolRentalAgreement]):
    """Repository for rent-to-own agreements."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ToolRentalAgreement)

    async def list_for_member(self, member_id: str) -> List[ToolRentalAgreement]:
        """List a member's agreements, most recently started first.

        Args:
            member_id: Profile id of the member

        Returns:
            Agreements for the member
        """
        stmt = (
            select(ToolRentalAgreement)
            .where(ToolRentalAgreement.member_id == member_id)
            .order_by(ToolRentalAgreement.start_date.desc(), ToolRentalAgreement.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ToolRepairRepository(SqlModelRepository[ToolRepair]):
    """Repository for tool repair tickets."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ToolRepair)

    async def list_for_tool(self, tool_id: str) -> List[ToolRepair]:
        stmt = select(ToolRepair).where(ToolRepair.tool_id == tool_id).order_by(ToolRepair.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
