"""
Tool rental entity models.

Members rent tools from the shared inventory under rent-to-own agreements.
Weekly payments accumulate in ``amount_paid`` until the retail price is
covered, at which point the agreement completes and the member owns the tool.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class ToolStatus(str, Enum):
    """Availability state of an inventory tool."""

    AVAILABLE = "available"
    RENTED = "rented"
    IN_REPAIR = "in_repair"
    IN_ASSESSMENT = "in_assessment"
    RETIRED = "retired"


class ToolCondition(str, Enum):
    """Physical condition grade used for donation assessment."""

    NEW = "new"
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class AgreementStatus(str, Enum):
    """Rent-to-own agreement state."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    DEFAULTED = "defaulted"
    TRADED_IN = "traded_in"


class RepairStatus(str, Enum):
    """Repair ticket state."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ToolInventory(Base, table=True):
    """Tool owned by the cooperative.

    Table: tool_inventory
    """

    __tablename__ = "tool_inventory"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    brand: str = Field(description="Manufacturer")
    brand_id: Optional[str] = Field(default=None, description="Brand catalog id used for rate lookups")
    model: str = Field(description="Model name")
    serial_number: Optional[str] = Field(default=None)
    category: str = Field(index=True, description="Tool category, e.g. 'drill'")
    condition: str = Field(default=ToolCondition.GOOD.value, description="Condition grade")
    photo_url: Optional[str] = Field(default=None)
    warranty_months: int = Field(default=0, description="Manufacturer warranty length")
    warranty_expiration: Optional[date] = Field(default=None)
    current_status: str = Field(default=ToolStatus.AVAILABLE.value, index=True)
    retail_price: float = Field(description="Retail price, also the rent-to-own total")
    purchase_cost: float = Field(default=0.0, description="What the cooperative paid")

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"ToolInventory(id={self.id}, brand={self.brand}, model={self.model}, status={self.current_status})"


class ToolRentalAgreement(Base, table=True):
    """Rent-to-own agreement between a member and a tool.

    Table: tool_rental_agreements
    """

    __tablename__ = "tool_rental_agreements"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    member_id: str = Field(index=True, description="Profile id of the renting member")
    tool_id: str = Field(index=True, description="Rented tool")
    weekly_payment_amount: float = Field(description="Weekly installment")
    total_amount_to_own: float = Field(description="Amount due before ownership transfers")
    amount_paid: float = Field(default=0.0)
    remaining_balance: float = Field(description="Outstanding balance")
    agreement_status: str = Field(default=AgreementStatus.PENDING.value, index=True)
    start_date: date = Field(default_factory=lambda: utc_now().date())
    expected_ownership_date: Optional[date] = Field(default=None)
    auto_deduct_from_projects: bool = Field(default=False)
    trade_in_credit_applied: float = Field(default=0.0, description="Credit carried over from a traded-in tool")
    traded_from_agreement_id: Optional[str] = Field(default=None, description="Agreement this one replaced")

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=DateTime)

    def __repr__(self) -> str:
        return (
            f"ToolRentalAgreement(id={self.id}, member_id={self.member_id}, "
            f"tool_id={self.tool_id}, status={self.agreement_status})"
        )


class ToolRepair(Base, table=True):
    """Repair ticket raised by a renting member.

    Table: tool_repairs
    """

    __tablename__ = "tool_repairs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    tool_id: str = Field(index=True)
    agreement_id: Optional[str] = Field(default=None)
    issue_description: str
    repair_status: str = Field(default=RepairStatus.PENDING.value)
    estimated_cost: float = Field(default=0.0)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"ToolRepair(id={self.id}, tool_id={self.tool_id}, status={self.repair_status})"
