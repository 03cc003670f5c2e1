"""
Repository bundle for dependency injection.

Groups every repository over one session so a service can touch several
tables and commit them together.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .calendar_events import CalendarEventRepository
from .invitations import BatchedInvitationRepository
from .marketplace import CategoryRepository, ListingRepository, TransactionRepository
from .profiles import ProfileRepository
from .sms import PhoneIntegrationRepository, SmsMessageLogRepository
from .teams import BusinessRepository, EstimateRepository, TaskAssignmentRepository, TeamMemberRepository
from .tools import ToolInventoryRepository, ToolRentalAgreementRepository, ToolRepairRepository


@dataclass(frozen=True)
class RepositoryBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    profiles: ProfileRepository
    categories: CategoryRepository
    listings: ListingRepository
    transactions: TransactionRepository
    tools: ToolInventoryRepository
    rentals: ToolRentalAgreementRepository
    repairs: ToolRepairRepository
    businesses: BusinessRepository
    team_members: TeamMemberRepository
    estimates: EstimateRepository
    task_assignments: TaskAssignmentRepository
    invitations: BatchedInvitationRepository
    calendar_events: CalendarEventRepository
    phone_integrations: PhoneIntegrationRepository
    sms_logs: SmsMessageLogRepository


def build_repositories(session: AsyncSession) -> RepositoryBundle:
    """Build a ``RepositoryBundle`` over a session.

    Args:
        session: Async session shared by every repository

    Returns:
        Bundle containing all repository instances
    """
    return RepositoryBundle(
        session=session,
        profiles=ProfileRepository(session),
        categories=CategoryRepository(session),
        listings=ListingRepository(session),
        transactions=TransactionRepository(session),
        tools=ToolInventoryRepository(session),
        rentals=ToolRentalAgreementRepository(session),
        repairs=ToolRepairRepository(session),
        businesses=BusinessRepository(session),
        team_members=TeamMemberRepository(session),
        estimates=EstimateRepository(session),
        task_assignments=TaskAssignmentRepository(session),
        invitations=BatchedInvitationRepository(session),
        calendar_events=CalendarEventRepository(session),
        phone_integrations=PhoneIntegrationRepository(session),
        sms_logs=SmsMessageLogRepository(session),
    )
