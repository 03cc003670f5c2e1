"""Business services built on the repositories and edge function client."""

from .analytics import SellerAnalyticsService, Timeframe, build_seller_analytics
from .calendar import CalendarService, SyncResult
from .invitations import InvitationService
from .leaderboard import LeaderboardService, aggregate_donations, rank_label
from .sms import SendResult, SmsService, format_phone_number, is_valid_phone_number
from .team_inbox import TeamInboxService, group_invites
from .tool_rentals import ToolRentalService, build_upgrade_options, trade_in_percentage
from .verification import VerificationService

__all__ = [
    "CalendarService",
    "InvitationService",
    "LeaderboardService",
    "SellerAnalyticsService",
    "SendResult",
    "SmsService",
    "SyncResult",
    "TeamInboxService",
    "Timeframe",
    "ToolRentalService",
    "VerificationService",
    "aggregate_donations",
    "build_seller_analytics",
    "build_upgrade_options",
    "format_phone_number",
    "group_invites",
    "is_valid_phone_number",
    "rank_label",
    "trade_in_percentage",
]
