"""
Async repositories over the platform tables.
"""

from .base import AsyncBaseRepository, QueryBuilder, SqlModelRepository
from .bundle import RepositoryBundle, build_repositories
from .calendar_events import CalendarEventRepository
from .invitations import BatchedInvitationRepository
from .marketplace import CategoryRepository, ListingRepository, TransactionRepository
from .profiles import ProfileRepository
from .sms import PhoneIntegrationRepository, SmsMessageLogRepository
from .teams import BusinessRepository, EstimateRepository, TaskAssignmentRepository, TeamMemberRepository
from .tools import ToolInventoryRepository, ToolRentalAgreementRepository, ToolRepairRepository

__all__ = [
    "AsyncBaseRepository",
    "BatchedInvitationRepository",
    "BusinessRepository",
    "CalendarEventRepository",
    "CategoryRepository",
    "EstimateRepository",
    "ListingRepository",
    "PhoneIntegrationRepository",
    "ProfileRepository",
    "QueryBuilder",
    "RepositoryBundle",
    "SmsMessageLogRepository",
    "SqlModelRepository",
    "TaskAssignmentRepository",
    "TeamMemberRepository",
    "ToolInventoryRepository",
    "ToolRentalAgreementRepository",
    "ToolRepairRepository",
    "TransactionRepository",
    "build_repositories",
]
