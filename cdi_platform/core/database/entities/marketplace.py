"""
Marketplace entity models.

Listings belong to a seller and optionally a category; transactions record
what a buyer paid. Transactions without a listing and with ``is_voluntary``
set are standalone donations that feed the donor leaderboard.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class ListingStatus(str, Enum):
    """Lifecycle state of a marketplace listing."""

    DRAFT = "draft"
    ACTIVE = "active"
    SOLD = "sold"
    EXPIRED = "expired"


class Category(Base, table=True):
    """Listing category.

    Table: categories
    """

    __tablename__ = "categories"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(description="Category display name")

    def __repr__(self) -> str:
        return f"Category(id={self.id}, name={self.name})"


class Listing(Base, table=True):
    """Marketplace listing.

    Table: listings
    """

    __tablename__ = "listings"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    seller_id: str = Field(index=True, description="Profile id of the seller")
    category_id: Optional[str] = Field(default=None, description="Category id")
    title: str = Field(description="Listing title")
    status: str = Field(default=ListingStatus.ACTIVE.value, description="Listing lifecycle state")
    current_bid: Optional[float] = Field(default=None, description="Highest auction bid")
    buy_now_price: Optional[float] = Field(default=None, description="Fixed purchase price")
    view_count: int = Field(default=0, description="Listing page views")
    # Stored as JSON string for portability
    delivery_options: str = Field(default="[]", description="JSON array of delivery option names")
    sold_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=DateTime)

    def get_delivery_options(self) -> List[str]:
        """Get delivery options as a list."""
        try:
            return json.loads(self.delivery_options) if self.delivery_options else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_delivery_options(self, options: List[str]) -> None:
        """Set delivery options from a list."""
        self.delivery_options = json.dumps(options)

    def __repr__(self) -> str:
        return f"Listing(id={self.id}, title={self.title}, status={self.status})"


class Transaction(Base, table=True):
    """Payment record for a sale or a voluntary donation.

    Table: transactions
    """

    __tablename__ = "transactions"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    listing_id: Optional[str] = Field(default=None, index=True, description="Listing paid for, if any")
    user_id: str = Field(index=True, description="Profile id of the payer")
    total_amount: float = Field(default=0.0, description="Total charged")
    base_amount: float = Field(default=0.0, description="Amount before any voluntary gratuity")
    voluntary_amount: float = Field(default=0.0, description="Voluntary gratuity portion")
    is_voluntary: bool = Field(default=False, description="Whether the payer added a voluntary amount")

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"Transaction(id={self.id}, user_id={self.user_id}, total={self.total_amount})"
