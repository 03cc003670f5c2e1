"""Entity builders shared by the database, service and API tests.

Each builder fills the required columns with plausible values; keyword
arguments override any field.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities import (
    AgreementStatus,
    BatchedInvitation,
    Business,
    CalendarEvent,
    Category,
    Estimate,
    Listing,
    PhoneIntegration,
    Profile,
    TaskAssignment,
    TeamMember,
    ToolInventory,
    ToolRentalAgreement,
    Transaction,
)


def make_profile(**overrides: Any) -> Profile:
    data = {"full_name": "Jane Doe", "first_name": "Jane", "last_name": "Doe", "email": "jane@example.com"}
    data.update(overrides)
    return Profile(**data)


def make_category(**overrides: Any) -> Category:
    data = {"name": "Power Tools"}
    data.update(overrides)
    return Category(**data)


def make_listing(seller_id: str, **overrides: Any) -> Listing:
    data = {"seller_id": seller_id, "title": "Cordless Drill", "status": "active"}
    data.update(overrides)
    return Listing(**data)


def make_transaction(user_id: str, **overrides: Any) -> Transaction:
    data = {"user_id": user_id, "total_amount": 100.0, "base_amount": 100.0}
    data.update(overrides)
    return Transaction(**data)


def make_tool(**overrides: Any) -> ToolInventory:
    data = {
        "brand": "DeWalt",
        "model": "DCD791",
        "category": "drill",
        "condition": "good",
        "warranty_months": 36,
        "retail_price": 200.0,
        "purchase_cost": 150.0,
    }
    data.update(overrides)
    return ToolInventory(**data)


def make_agreement(member_id: str, tool_id: str, **overrides: Any) -> ToolRentalAgreement:
    data = {
        "member_id": member_id,
        "tool_id": tool_id,
        "weekly_payment_amount": 10.0,
        "total_amount_to_own": 200.0,
        "amount_paid": 100.0,
        "remaining_balance": 100.0,
        "agreement_status": AgreementStatus.ACTIVE.value,
        "start_date": date(2025, 1, 6),
    }
    data.update(overrides)
    return ToolRentalAgreement(**data)


def make_business(**overrides: Any) -> Business:
    data = {"name": "Acme Builders", "email": "office@acme.test", "phone": "555-0100"}
    data.update(overrides)
    return Business(**data)


def make_member(business_id: str, **overrides: Any) -> TeamMember:
    data = {
        "business_id": business_id,
        "first_name": "Sam",
        "last_name": "Carter",
        "email": "sam@example.com",
        "phone": "+15555550123",
    }
    data.update(overrides)
    return TeamMember(**data)


def make_estimate(business_id: str, **overrides: Any) -> Estimate:
    data = {"business_id": business_id, "project_name": "Kitchen refresh", "client_name": "Pat", "total": 5000.0}
    data.update(overrides)
    return Estimate(**data)


def make_assignment(estimate_id: str, team_member_id: str, **overrides: Any) -> TaskAssignment:
    data = {
        "estimate_id": estimate_id,
        "team_member_id": team_member_id,
        "line_item_description": "Paint walls",
        "line_item_cost": 800.0,
        "assigned_cost": 600.0,
    }
    data.update(overrides)
    return TaskAssignment(**data)


def make_batch(business_id: str, team_member_id: str, **overrides: Any) -> BatchedInvitation:
    data = {
        "business_id": business_id,
        "team_member_id": team_member_id,
        "invitation_token": "a" * 64,
        "expires_at": utc_now() + timedelta(days=7),
    }
    data.update(overrides)
    return BatchedInvitation(**data)


def make_event(business_id: str, team_member_id: str, **overrides: Any) -> CalendarEvent:
    start = datetime(2026, 3, 2, 8, 0)
    data = {
        "business_id": business_id,
        "team_member_id": team_member_id,
        "event_title": "Paint walls",
        "start_datetime": start,
        "end_datetime": start + timedelta(hours=8),
    }
    data.update(overrides)
    return CalendarEvent(**data)


def make_phone_integration(business_id: str, **overrides: Any) -> PhoneIntegration:
    data = {"business_id": business_id, "phone_number": "+15555550100"}
    data.update(overrides)
    return PhoneIntegration(**data)
