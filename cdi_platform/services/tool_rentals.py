"""Member tool rentals.

Rent-to-own arithmetic, trade-in upgrades, donation previews and repair
requests. The three backend procedures (``calculate_tool_rental_rate``,
``assess_donation_value`` and ``process_tool_trade_in``) are implemented here
as plain functions and service methods over one session.

Trade-in credit tiers
---------------------

A member who has paid at least 25 %, 50 % or 70 % of an agreement may trade
the tool in for 25 %, 50 % or 70 % of its rent-to-own total as credit toward
a pricier tool in the same category.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities.tools import (
    AgreementStatus,
    ToolCondition,
    ToolInventory,
    ToolRentalAgreement,
    ToolRepair,
    ToolStatus,
)
from cdi_platform.core.database.repositories.bundle import RepositoryBundle
from cdi_platform.core.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

WEEKS_PER_YEAR = 52
UPGRADE_PRICE_FLOOR = 1.2
UPGRADE_OPTION_LIMIT = 5
TRADE_IN_TIERS = (70, 50, 25)

RENTAL_MARGIN = 0.15
RENTAL_MARGIN_LONG_WARRANTY = 0.10
LONG_WARRANTY_MONTHS = 24
MIN_WEEKLY_RATE = 1.0

CONDITION_FACTORS = {
    ToolCondition.NEW.value: 1.0,
    ToolCondition.EXCELLENT.value: 0.85,
    ToolCondition.GOOD.value: 0.7,
    ToolCondition.FAIR.value: 0.5,
    ToolCondition.POOR.value: 0.25,
}
WARRANTY_CREDIT_BONUS = 5.0


# =====================================================================
# Pure calculations
# =====================================================================


def ownership_progress(agreement: ToolRentalAgreement) -> float:
    """Percent of the rent-to-own total already paid."""
    if not agreement.total_amount_to_own:
        return 0.0
    return agreement.amount_paid / agreement.total_amount_to_own * 100


def weeks_remaining(agreement: ToolRentalAgreement) -> int:
    """Whole weekly payments left until ownership."""
    if not agreement.weekly_payment_amount:
        return 0
    return max(0, math.ceil(agreement.remaining_balance / agreement.weekly_payment_amount))


def trade_in_percentage(payment_percentage: float) -> int:
    """Credit tier earned by a payment percentage."""
    for tier in TRADE_IN_TIERS:
        if payment_percentage >= tier:
            return tier
    return 0


def calculate_tool_rental_rate(warranty_months: int, purchase_cost: float) -> float:
    """Weekly rent-to-own rate for a tool.

    The cooperative recovers its purchase cost plus a margin over one year.
    Tools with a long manufacturer warranty carry less repair risk and get
    the lower margin.
    """
    margin = RENTAL_MARGIN_LONG_WARRANTY if warranty_months >= LONG_WARRANTY_MONTHS else RENTAL_MARGIN
    return max(MIN_WEEKLY_RATE, round(purchase_cost * (1 + margin) / WEEKS_PER_YEAR, 2))


class DonationAssessment(BaseModel):
    credit_percentage: float
    tax_deduction_percentage: float


def assess_donation_value(
    condition: str, has_active_warranty: bool, amount_paid_percentage: float
) -> DonationAssessment:
    """Credit and tax deduction earned by donating a rented tool back.

    The deductible share is what the member has paid, discounted by the
    tool's condition. Credit follows the trade-in tier, discounted the same
    way, plus a small bonus while the warranty is still active.
    """
    factor = CONDITION_FACTORS.get(condition, CONDITION_FACTORS[ToolCondition.FAIR.value])
    paid = max(0.0, min(100.0, amount_paid_percentage))
    credit = trade_in_percentage(paid) * factor + (WARRANTY_CREDIT_BONUS if has_active_warranty else 0.0)
    return DonationAssessment(
        credit_percentage=round(min(float(TRADE_IN_TIERS[0]), credit), 2),
        tax_deduction_percentage=round(paid * factor, 2),
    )


# =====================================================================
# Views
# =====================================================================


class RentalView(BaseModel):
    """Agreement joined with its tool and progress figures."""

    agreement: ToolRentalAgreement
    tool: Optional[ToolInventory] = None
    ownership_progress: float
    weeks_remaining: int
    trade_in_percentage: int


class DashboardSummary(BaseModel):
    total_weekly_payments: float
    total_invested: float
    total_owned_value: float
    active_rentals: int
    completed_rentals: int


class UpgradeOption(BaseModel):
    tool: ToolInventory
    trade_in_percentage: int
    trade_in_value: float
    additional_cost: float
    new_weekly_payment: float


class DonationPreview(BaseModel):
    agreement_id: str
    tool: ToolInventory
    warranty_active: bool
    credit_percentage: float
    tax_deduction_percentage: float
    estimated_tax_deduction: float
    credit_amount: float


class TradeInResult(BaseModel):
    old_agreement: ToolRentalAgreement
    new_agreement: ToolRentalAgreement
    credit_applied: float


def rental_view(agreement: ToolRentalAgreement, tool: Optional[ToolInventory]) -> RentalView:
    progress = ownership_progress(agreement)
    return RentalView(
        agreement=agreement,
        tool=tool,
        ownership_progress=progress,
        weeks_remaining=weeks_remaining(agreement),
        trade_in_percentage=trade_in_percentage(progress),
    )


def dashboard_summary(agreements: List[ToolRentalAgreement]) -> DashboardSummary:
    """Totals shown at the top of the member tool dashboard."""
    active = [a for a in agreements if a.agreement_status == AgreementStatus.ACTIVE.value]
    completed = [a for a in agreements if a.agreement_status == AgreementStatus.COMPLETED.value]
    return DashboardSummary(
        total_weekly_payments=sum(a.weekly_payment_amount for a in active),
        total_invested=sum(a.amount_paid for a in agreements),
        total_owned_value=sum(a.total_amount_to_own for a in completed),
        active_rentals=len(active),
        completed_rentals=len(completed),
    )


def build_upgrade_options(agreement: ToolRentalAgreement, candidates: List[ToolInventory]) -> List[UpgradeOption]:
    """Price each candidate tool after applying the agreement's trade-in credit.

    The remaining cost is spread over a year of weekly payments.
    """
    percentage = trade_in_percentage(ownership_progress(agreement))
    trade_in_value = agreement.total_amount_to_own * percentage / 100
    options = []
    for tool in candidates:
        additional_cost = tool.retail_price - trade_in_value
        options.append(
            UpgradeOption(
                tool=tool,
                trade_in_percentage=percentage,
                trade_in_value=trade_in_value,
                additional_cost=additional_cost,
                new_weekly_payment=additional_cost / WEEKS_PER_YEAR,
            )
        )
    return options


# =====================================================================
# Service
# =====================================================================


class ToolRentalService:
    """Rent-to-own operations for members."""

    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def _agreement(self, agreement_id: str) -> ToolRentalAgreement:
        agreement = await self.repos.rentals.get_by_id(agreement_id)
        if agreement is None:
            raise NotFoundError("Rental agreement", agreement_id)
        return agreement

    async def _tool(self, tool_id: str) -> ToolInventory:
        tool = await self.repos.tools.get_by_id(tool_id)
        if tool is None:
            raise NotFoundError("Tool", tool_id)
        return tool

    async def list_rentals(self, member_id: str) -> List[RentalView]:
        """A member's agreements with tool details, most recent first."""
        agreements = await self.repos.rentals.list_for_member(member_id)
        tools = await self.repos.tools.get_many(a.tool_id for a in agreements)
        return [rental_view(a, tools.get(a.tool_id)) for a in agreements]

    async def summary(self, member_id: str) -> DashboardSummary:
        return dashboard_summary(await self.repos.rentals.list_for_member(member_id))

    async def load_upgrade_options(self, agreement_id: str) -> List[UpgradeOption]:
        """Available tools a member could trade up to.

        Candidates share the current tool's category and cost at least 20 %
        more than the current rent-to-own total; cheapest first, at most five.
        """
        agreement = await self._agreement(agreement_id)
        tool = await self._tool(agreement.tool_id)
        candidates = await self.repos.tools.list_upgrade_candidates(
            tool.category,
            agreement.total_amount_to_own * UPGRADE_PRICE_FLOOR,
            limit=UPGRADE_OPTION_LIMIT,
        )
        return build_upgrade_options(agreement, candidates)

    async def process_trade_in(
        self, agreement_id: str, new_tool_id: str, credit_percentage: Optional[float] = None
    ) -> TradeInResult:
        """Trade an active agreement's tool in for a new tool.

        The old agreement closes as ``traded_in`` and its tool goes to
        assessment. A new pending agreement starts for the new tool with its
        balance already reduced by the credit.

        Args:
            agreement_id: Agreement being traded in
            new_tool_id: Tool to rent instead
            credit_percentage: Credit the caller expects; rejected if above
                the tier the agreement has earned

        Returns:
            Both agreements and the credit applied
        """
        agreement = await self._agreement(agreement_id)
        if agreement.agreement_status != AgreementStatus.ACTIVE.value:
            raise ConflictError(f"Only active agreements can be traded in (status={agreement.agreement_status})")

        earned = trade_in_percentage(ownership_progress(agreement))
        if earned == 0:
            raise ValidationError("At least 25% of the agreement must be paid before a trade-in")
        if credit_percentage is not None and credit_percentage < 0:
            raise ValidationError(f"Credit percentage cannot be negative: {credit_percentage}")
        if credit_percentage is not None and credit_percentage > earned:
            raise ValidationError(f"Requested credit {credit_percentage}% exceeds earned tier {earned}%")
        percentage = credit_percentage if credit_percentage is not None else earned

        old_tool = await self._tool(agreement.tool_id)
        new_tool = await self._tool(new_tool_id)
        if new_tool.current_status != ToolStatus.AVAILABLE.value:
            raise ConflictError(f"Tool {new_tool_id} is not available")

        credit = agreement.total_amount_to_own * percentage / 100
        remaining = max(0.0, new_tool.retail_price - credit)
        new_agreement = ToolRentalAgreement(
            member_id=agreement.member_id,
            tool_id=new_tool.id,
            weekly_payment_amount=round(remaining / WEEKS_PER_YEAR, 2),
            total_amount_to_own=new_tool.retail_price,
            remaining_balance=remaining,
            agreement_status=AgreementStatus.PENDING.value,
            auto_deduct_from_projects=agreement.auto_deduct_from_projects,
            trade_in_credit_applied=credit,
            traded_from_agreement_id=agreement.id,
        )
        agreement.agreement_status = AgreementStatus.TRADED_IN.value
        old_tool.current_status = ToolStatus.IN_ASSESSMENT.value
        new_tool.current_status = ToolStatus.RENTED.value

        await self.repos.rentals.save_all([agreement, old_tool, new_tool, new_agreement])
        logger.info(
            f"Trade-in processed: agreement={agreement.id} -> {new_agreement.id}, "
            f"credit={credit:.2f} ({percentage}%)"
        )
        return TradeInResult(old_agreement=agreement, new_agreement=new_agreement, credit_applied=credit)

    async def preview_donation_value(self, agreement_id: str, today: Optional[date] = None) -> DonationPreview:
        """What a member would receive for donating a rented tool back."""
        agreement = await self._agreement(agreement_id)
        tool = await self._tool(agreement.tool_id)
        today = today or utc_now().date()
        warranty_active = tool.warranty_expiration is not None and tool.warranty_expiration > today

        assessment = assess_donation_value(tool.condition, warranty_active, ownership_progress(agreement))
        return DonationPreview(
            agreement_id=agreement.id,
            tool=tool,
            warranty_active=warranty_active,
            credit_percentage=assessment.credit_percentage,
            tax_deduction_percentage=assessment.tax_deduction_percentage,
            estimated_tax_deduction=agreement.total_amount_to_own * assessment.tax_deduction_percentage / 100,
            credit_amount=agreement.total_amount_to_own * assessment.credit_percentage / 100,
        )

    async def request_repair(self, agreement_id: str, issue_description: str) -> ToolRepair:
        """Open a repair ticket and take the tool out of service."""
        if not issue_description or not issue_description.strip():
            raise ValidationError("Issue description is required")
        agreement = await self._agreement(agreement_id)
        tool = await self._tool(agreement.tool_id)

        repair = ToolRepair(
            tool_id=tool.id,
            agreement_id=agreement.id,
            issue_description=issue_description.strip(),
            estimated_cost=0.0,
        )
        tool.current_status = ToolStatus.IN_REPAIR.value
        await self.repos.repairs.save_all([repair, tool])
        logger.info(f"Repair requested for tool {tool.id} on agreement {agreement.id}")
        return repair

    async def initiate_rental(self, member_id: str, tool_id: str, start: Optional[datetime] = None) -> ToolRentalAgreement:
        """Start a pending rent-to-own agreement for an available tool.

        The tool is reserved immediately so it cannot be rented twice.
        """
        tool = await self._tool(tool_id)
        if tool.current_status != ToolStatus.AVAILABLE.value:
            raise ConflictError(f"Tool {tool_id} is not available")

        weekly = calculate_tool_rental_rate(tool.warranty_months, tool.purchase_cost or tool.retail_price)
        start_date = (start or utc_now()).date()
        agreement = ToolRentalAgreement(
            member_id=member_id,
            tool_id=tool.id,
            weekly_payment_amount=weekly,
            total_amount_to_own=tool.retail_price,
            remaining_balance=tool.retail_price,
            agreement_status=AgreementStatus.PENDING.value,
            start_date=start_date,
        )
        tool.current_status = ToolStatus.RENTED.value
        await self.repos.rentals.save_all([agreement, tool])
        logger.info(f"Rental initiated: member={member_id} tool={tool.id} weekly={weekly:.2f}")
        return agreement

    async def search_available_tools(self, term: str = "") -> List[ToolInventory]:
        return await self.repos.tools.search_available(term.strip())
