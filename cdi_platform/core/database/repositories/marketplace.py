"""
Marketplace repositories.

Listings, categories and transactions. The seller analytics service reads
through these to assemble per-listing sale prices.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.marketplace import Category, Listing, Transaction
from .base import SqlModelRepository


class CategoryRepository(SqlModelRepository[Category]):
    """Repository for listing categories."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Category)


class ListingRepository(SqlModelRepository[Listing]):
    """Repository for marketplace listings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Listing)

    async def list_for_seller(self, seller_id: str, since: Optional[datetime] = None) -> List[Listing]:
        """List a seller's listings, optionally only those created since a cutoff.

        Args:
            seller_id: Profile id of the seller
            since: Inclusive lower bound on ``created_at``; None for all time

        Returns:
            Listings ordered newest first
        """
        stmt = select(Listing).where(Listing.seller_id == seller_id)
        if since is not None:
            stmt = stmt.where(Listing.created_at >= since)
        stmt = stmt.order_by(Listing.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class TransactionRepository(SqlModelRepository[Transaction]):
    """Repository for sale and donation transactions."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Transaction)

    async def totals_by_listing(self, listing_ids: Iterable[str]) -> Dict[str, List[float]]:
        """Collect transaction totals per listing in the order they were recorded.

        Args:
            listing_ids: Listings to look up

        Returns:
            Mapping of listing id to its transaction totals, oldest first
        """
        ids = set(listing_ids)
        if not ids:
            return {}
        stmt = select(Transaction).where(Transaction.listing_id.in_(ids)).order_by(Transaction.created_at)
        result = await self.session.execute(stmt)
        totals: Dict[str, List[float]] = {}
        for tx in result.scalars().all():
            totals.setdefault(tx.listing_id, []).append(tx.total_amount)
        return totals

    async def list_voluntary(self, since: Optional[datetime] = None) -> List[Transaction]:
        """List transactions that carry a voluntary amount.

        Args:
            since: Inclusive lower bound on ``created_at``; None for all time

        Returns:
            Voluntary transactions
        """
        stmt = select(Transaction).where(Transaction.is_voluntary == True)  # noqa: E712
        if since is not None:
            stmt = stmt.where(Transaction.created_at >= since)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
