"""Seller analytics.

Aggregates a seller's listings into headline stats, top categories, recent
and best sales, and a six month revenue series. The aggregation is pure
(``build_seller_analytics``) so it can be tested without a database;
``SellerAnalyticsService`` only loads the rows.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities.marketplace import Listing, ListingStatus
from cdi_platform.core.database.repositories.bundle import RepositoryBundle

logger = logging.getLogger(__name__)

TOP_N = 5
REVENUE_MONTHS = 6
UNCATEGORIZED = "Uncategorized"
DEFAULT_DELIVERY = "self_pickup"


class Timeframe(str, Enum):
    """Reporting window, counted back from now."""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


_TIMEFRAME_DAYS = {Timeframe.WEEK: 7, Timeframe.MONTH: 30, Timeframe.YEAR: 365}


class ListingRecord(BaseModel):
    """Listing joined with its category name and transaction totals."""

    title: str
    status: str
    category: Optional[str] = None
    current_bid: Optional[float] = None
    buy_now_price: Optional[float] = None
    view_count: int = 0
    delivery_options: List[str] = Field(default_factory=list)
    transaction_totals: List[float] = Field(default_factory=list)
    sold_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class SalesStats(BaseModel):
    total_revenue: float = 0.0
    total_sales: int = 0
    average_sale_price: float = 0.0
    total_listings: int = 0
    active_listings: int = 0
    sold_listings: int = 0
    conversion_rate: float = 0.0
    total_views: int = 0


class CategoryPerformance(BaseModel):
    category: str
    sales: int
    revenue: float
    avg_price: float


class TrendingItem(BaseModel):
    title: str
    category: str
    price: float
    sold_at: datetime
    delivery_type: str


class MonthlyRevenue(BaseModel):
    month: str = Field(description="YYYY-MM")
    revenue: float
    sales: int


class SellerAnalytics(BaseModel):
    stats: SalesStats
    top_categories: List[CategoryPerformance]
    recent_sales: List[TrendingItem]
    best_sellers: List[TrendingItem]
    revenue_by_month: List[MonthlyRevenue]


def timeframe_start(timeframe: Timeframe, now: datetime) -> Optional[datetime]:
    """Lower bound on ``created_at`` for a timeframe; None for all time."""
    days = _TIMEFRAME_DAYS.get(Timeframe(timeframe))
    return now - timedelta(days=days) if days else None


def sale_price(listing: ListingRecord) -> float:
    """What a listing sold (or would sell) for.

    The first transaction total wins unless it is zero, then the current
    bid, then the buy-now price, then zero.
    """
    if listing.transaction_totals and listing.transaction_totals[0]:
        return listing.transaction_totals[0]
    if listing.current_bid:
        return listing.current_bid
    if listing.buy_now_price:
        return listing.buy_now_price
    return 0.0


def _sold_timestamp(listing: ListingRecord) -> datetime:
    return listing.sold_at or listing.updated_at


def _trending(listing: ListingRecord) -> TrendingItem:
    return TrendingItem(
        title=listing.title,
        category=listing.category or UNCATEGORIZED,
        price=sale_price(listing),
        sold_at=_sold_timestamp(listing),
        delivery_type=listing.delivery_options[0] if listing.delivery_options else DEFAULT_DELIVERY,
    )


def build_seller_analytics(listings: List[ListingRecord]) -> SellerAnalytics:
    """Aggregate listings into the seller dashboard.

    Every average and rate is zero when its denominator is zero.
    """
    sold = [listing for listing in listings if listing.status == ListingStatus.SOLD.value]
    active = [listing for listing in listings if listing.status == ListingStatus.ACTIVE.value]

    total_revenue = sum(sale_price(listing) for listing in sold)
    stats = SalesStats(
        total_revenue=total_revenue,
        total_sales=len(sold),
        average_sale_price=total_revenue / len(sold) if sold else 0.0,
        total_listings=len(listings),
        active_listings=len(active),
        sold_listings=len(sold),
        conversion_rate=len(sold) / len(listings) * 100 if listings else 0.0,
        total_views=sum(listing.view_count or 0 for listing in listings),
    )

    by_category: Dict[str, List[float]] = defaultdict(list)
    for listing in sold:
        by_category[listing.category or UNCATEGORIZED].append(sale_price(listing))
    categories = [
        CategoryPerformance(category=name, sales=len(prices), revenue=sum(prices), avg_price=sum(prices) / len(prices))
        for name, prices in by_category.items()
    ]
    categories.sort(key=lambda c: c.revenue, reverse=True)

    recent = sorted(sold, key=_sold_timestamp, reverse=True)[:TOP_N]
    best = sorted(sold, key=sale_price, reverse=True)[:TOP_N]

    monthly: Dict[str, MonthlyRevenue] = {}
    for listing in sold:
        key = _sold_timestamp(listing).strftime("%Y-%m")
        entry = monthly.setdefault(key, MonthlyRevenue(month=key, revenue=0.0, sales=0))
        entry.revenue += sale_price(listing)
        entry.sales += 1
    revenue_by_month = [monthly[key] for key in sorted(monthly)][-REVENUE_MONTHS:]

    return SellerAnalytics(
        stats=stats,
        top_categories=categories[:TOP_N],
        recent_sales=[_trending(listing) for listing in recent],
        best_sellers=[_trending(listing) for listing in best],
        revenue_by_month=revenue_by_month,
    )


class SellerAnalyticsService:
    """Load a seller's listings and aggregate them."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def load_records(self, seller_id: str, since: Optional[datetime]) -> List[ListingRecord]:
        listings: List[Listing] = await self.repos.listings.list_for_seller(seller_id, since)
        categories = await self.repos.categories.get_many(listing.category_id for listing in listings)
        totals = await self.repos.transactions.totals_by_listing(listing.id for listing in listings)
        return [
            ListingRecord(
                title=listing.title,
                status=listing.status,
                category=categories[listing.category_id].name if listing.category_id in categories else None,
                current_bid=listing.current_bid,
                buy_now_price=listing.buy_now_price,
                view_count=listing.view_count,
                delivery_options=listing.get_delivery_options(),
                transaction_totals=totals.get(listing.id, []),
                sold_at=listing.sold_at,
                created_at=listing.created_at,
                updated_at=listing.updated_at,
            )
            for listing in listings
        ]

    async def load(
        self, seller_id: str, timeframe: Timeframe = Timeframe.MONTH, now: Optional[datetime] = None
    ) -> SellerAnalytics:
        """Analytics for a seller over a timeframe.

        Args:
            seller_id: Profile id of the seller
            timeframe: Reporting window
            now: Reference time; defaults to the current UTC time

        Returns:
            Aggregated analytics
        """
        since = timeframe_start(timeframe, now or utc_now())
        records = await self.load_records(seller_id, since)
        logger.debug(f"Seller {seller_id}: aggregating {len(records)} listings for timeframe={timeframe}")
        return build_seller_analytics(records)
