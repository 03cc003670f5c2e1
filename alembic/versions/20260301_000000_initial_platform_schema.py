"""Initial schema for the CDI Platform

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

Creates the tables the service layer reads and writes:
- Profiles and business verification fields
- Marketplace categories, listings and transactions
- Tool inventory, rent-to-own agreements and repairs
- Businesses, team members, estimates, task assignments and batched invitations
- Calendar events queued for Google Calendar sync
- Phone integrations and the SMS message log

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(36), nullable=False)


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column("created_at", sa.DateTime(), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(), nullable=False))
    return columns


def upgrade() -> None:
    """Create all tables."""

    # Profiles
    op.create_table(
        "profiles",
        _id(),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        sa.Column("business_name", sa.String(), nullable=True),
        sa.Column("verification_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("workspace_email", sa.String(), nullable=True),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_profiles_workspace_email", "workspace_email"),
    )

    # Marketplace
    op.create_table(
        "categories",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "listings",
        _id(),
        sa.Column("seller_id", sa.String(36), nullable=False),
        sa.Column("category_id", sa.String(36), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("current_bid", sa.Float(), nullable=True),
        sa.Column("buy_now_price", sa.Float(), nullable=True),
        sa.Column("view_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("delivery_options", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("sold_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_listings_seller_id", "seller_id"),
        sa.Index("ix_listings_created_at", "created_at"),
    )
    op.create_table(
        "transactions",
        _id(),
        sa.Column("listing_id", sa.String(36), nullable=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("base_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("voluntary_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("is_voluntary", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_transactions_listing_id", "listing_id"),
        sa.Index("ix_transactions_user_id", "user_id"),
        sa.Index("ix_transactions_created_at", "created_at"),
    )

    # Tools
    op.create_table(
        "tool_inventory",
        _id(),
        sa.Column("brand", sa.String(), nullable=False),
        sa.Column("brand_id", sa.String(36), nullable=True),
        sa.Column("model", sa.String(), nullable=False),
        sa.Column("serial_number", sa.String(), nullable=True),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("condition", sa.String(16), nullable=False, server_default="good"),
        sa.Column("photo_url", sa.String(), nullable=True),
        sa.Column("warranty_months", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("warranty_expiration", sa.Date(), nullable=True),
        sa.Column("current_status", sa.String(16), nullable=False, server_default="available"),
        sa.Column("retail_price", sa.Float(), nullable=False),
        sa.Column("purchase_cost", sa.Float(), nullable=False, server_default="0"),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_tool_inventory_category", "category"),
        sa.Index("ix_tool_inventory_current_status", "current_status"),
    )
    op.create_table(
        "tool_rental_agreements",
        _id(),
        sa.Column("member_id", sa.String(36), nullable=False),
        sa.Column("tool_id", sa.String(36), nullable=False),
        sa.Column("weekly_payment_amount", sa.Float(), nullable=False),
        sa.Column("total_amount_to_own", sa.Float(), nullable=False),
        sa.Column("amount_paid", sa.Float(), nullable=False, server_default="0"),
        sa.Column("remaining_balance", sa.Float(), nullable=False),
        sa.Column("agreement_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("expected_ownership_date", sa.Date(), nullable=True),
        sa.Column("auto_deduct_from_projects", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("trade_in_credit_applied", sa.Float(), nullable=False, server_default="0"),
        sa.Column("traded_from_agreement_id", sa.String(36), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_tool_rental_agreements_member_id", "member_id"),
        sa.Index("ix_tool_rental_agreements_tool_id", "tool_id"),
        sa.Index("ix_tool_rental_agreements_agreement_status", "agreement_status"),
    )
    op.create_table(
        "tool_repairs",
        _id(),
        sa.Column("tool_id", sa.String(36), nullable=False),
        sa.Column("agreement_id", sa.String(36), nullable=True),
        sa.Column("issue_description", sa.Text(), nullable=False),
        sa.Column("repair_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("estimated_cost", sa.Float(), nullable=False, server_default="0"),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_tool_repairs_tool_id", "tool_id"),
    )

    # Teams
    op.create_table(
        "businesses",
        _id(),
        sa.Column("owner_id", sa.String(36), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "team_members",
        _id(),
        sa.Column("business_id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False, server_default=""),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_team_members_business_id", "business_id"),
        sa.Index("ix_team_members_user_id", "user_id"),
    )
    op.create_table(
        "estimates",
        _id(),
        sa.Column("business_id", sa.String(36), nullable=False),
        sa.Column("project_name", sa.String(), nullable=False),
        sa.Column("client_name", sa.String(), nullable=True),
        sa.Column("zip_code", sa.String(10), nullable=True),
        sa.Column("total", sa.Float(), nullable=False, server_default="0"),
        sa.Column("line_items", sa.Text(), nullable=False, server_default="[]"),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_estimates_business_id", "business_id"),
    )
    op.create_table(
        "task_assignments",
        _id(),
        sa.Column("estimate_id", sa.String(36), nullable=False),
        sa.Column("team_member_id", sa.String(36), nullable=False),
        sa.Column("batch_invitation_id", sa.String(36), nullable=True),
        sa.Column("line_item_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("line_item_description", sa.Text(), nullable=False, server_default=""),
        sa.Column("line_item_cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("assigned_cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(16), nullable=False, server_default="invited"),
        sa.Column("invited_at", sa.DateTime(), nullable=False),
        sa.Column("responded_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_task_assignments_estimate_id", "estimate_id"),
        sa.Index("ix_task_assignments_team_member_id", "team_member_id"),
        sa.Index("ix_task_assignments_batch_invitation_id", "batch_invitation_id"),
        sa.Index("ix_task_assignments_status", "status"),
    )
    op.create_table(
        "batched_invitations",
        _id(),
        sa.Column("business_id", sa.String(36), nullable=False),
        sa.Column("team_member_id", sa.String(36), nullable=False),
        sa.Column("invitation_token", sa.String(64), nullable=False),
        sa.Column("total_tasks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("sent_at", sa.DateTime(), nullable=True),
        sa.Column("responded_at", sa.DateTime(), nullable=True),
        sa.Column("email_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sms_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_batched_invitations_business_id", "business_id"),
        sa.Index("ix_batched_invitations_team_member_id", "team_member_id"),
        sa.Index("ix_batched_invitations_invitation_token", "invitation_token", unique=True),
        sa.Index("ix_batched_invitations_created_at", "created_at"),
    )

    # Calendar
    op.create_table(
        "calendar_events",
        _id(),
        sa.Column("business_id", sa.String(36), nullable=False),
        sa.Column("team_member_id", sa.String(36), nullable=False),
        sa.Column("task_assignment_id", sa.String(36), nullable=True),
        sa.Column("estimate_id", sa.String(36), nullable=True),
        sa.Column("batch_invitation_id", sa.String(36), nullable=True),
        sa.Column("google_calendar_id", sa.String(), nullable=True),
        sa.Column("google_event_id", sa.String(), nullable=True),
        sa.Column("event_title", sa.String(), nullable=False),
        sa.Column("event_description", sa.Text(), nullable=True),
        sa.Column("event_location", sa.String(), nullable=True),
        sa.Column("start_datetime", sa.DateTime(), nullable=False),
        sa.Column("end_datetime", sa.DateTime(), nullable=False),
        sa.Column("all_day", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("sync_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("sync_error", sa.Text(), nullable=True),
        sa.Column("last_sync_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_calendar_events_business_id", "business_id"),
        sa.Index("ix_calendar_events_team_member_id", "team_member_id"),
        sa.Index("ix_calendar_events_estimate_id", "estimate_id"),
        sa.Index("ix_calendar_events_sync_status", "sync_status"),
        sa.Index("ix_calendar_events_created_at", "created_at"),
    )

    # SMS
    op.create_table(
        "phone_integrations",
        _id(),
        sa.Column("business_id", sa.String(36), nullable=False),
        sa.Column("phone_number", sa.String(32), nullable=False),
        sa.Column("phone_provider", sa.String(32), nullable=False, server_default="twilio"),
        sa.Column("sms_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_phone_integrations_business_id", "business_id", unique=True),
    )
    op.create_table(
        "sms_message_logs",
        _id(),
        sa.Column("direction", sa.String(16), nullable=False),
        sa.Column("from_number", sa.String(32), nullable=False),
        sa.Column("to_number", sa.String(32), nullable=False),
        sa.Column("message_body", sa.Text(), nullable=False),
        sa.Column("message_type", sa.String(32), nullable=True),
        sa.Column("message_status", sa.String(16), nullable=False, server_default="sent"),
        sa.Column("task_assignment_id", sa.String(36), nullable=True),
        sa.Column("estimate_id", sa.String(36), nullable=True),
        sa.Column("customer_id", sa.String(36), nullable=True),
        sa.Column("team_member_id", sa.String(36), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_sms_message_logs_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "sms_message_logs",
        "phone_integrations",
        "calendar_events",
        "batched_invitations",
        "task_assignments",
        "estimates",
        "team_members",
        "businesses",
        "tool_repairs",
        "tool_rental_agreements",
        "tool_inventory",
        "transactions",
        "listings",
        "categories",
        "profiles",
    ):
        op.drop_table(table)
