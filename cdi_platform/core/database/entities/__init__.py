"""
SQLModel entities for the platform tables.

Importing this package registers every table with ``Base.metadata``.
"""

from .calendar_events import CalendarEvent, SyncStatus
from .marketplace import Category, Listing, ListingStatus, Transaction
from .profiles import Profile, VerificationStatus
from .sms import MessageDirection, PhoneIntegration, SmsMessageLog
from .teams import (
    AssignmentStatus,
    BatchedInvitation,
    Business,
    Estimate,
    InvitationStatus,
    TaskAssignment,
    TeamMember,
)
from .tools import (
    AgreementStatus,
    RepairStatus,
    ToolCondition,
    ToolInventory,
    ToolRentalAgreement,
    ToolRepair,
    ToolStatus,
)

__all__ = [
    "AgreementStatus",
    "AssignmentStatus",
    "BatchedInvitation",
    "Business",
    "CalendarEvent",
    "Category",
    "Estimate",
    "InvitationStatus",
    "Listing",
    "ListingStatus",
    "MessageDirection",
    "PhoneIntegration",
    "Profile",
    "RepairStatus",
    "SmsMessageLog",
    "SyncStatus",
    "TaskAssignment",
    "TeamMember",
    "ToolCondition",
    "ToolInventory",
    "ToolRentalAgreement",
    "ToolRepair",
    "ToolStatus",
    "Transaction",
    "VerificationStatus",
]
