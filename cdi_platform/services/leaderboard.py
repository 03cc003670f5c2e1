"""Donor leaderboard.

Ranks members by the voluntary amounts (gratuities) they add to marketplace
transactions, for the current month and for all time.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities.marketplace import Transaction
from cdi_platform.core.database.entities.profiles import Profile
from cdi_platform.core.database.repositories.bundle import RepositoryBundle

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10
ANONYMOUS = "Anonymous"
_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


class DonorStats(BaseModel):
    member_id: str
    member_name: str = ANONYMOUS
    member_avatar: Optional[str] = None
    business_name: Optional[str] = None
    total_donated: float = 0.0
    donation_count: int = 0
    average_gratuity_percentage: float = 0.0


class Leaderboards(BaseModel):
    monthly: List[DonorStats]
    all_time: List[DonorStats]


def rank_label(rank: int) -> str:
    return _MEDALS.get(rank, f"#{rank}")


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def aggregate_donations(transactions: List[Transaction], profiles: Dict[str, Profile]) -> List[DonorStats]:
    """Total each member's donations, largest donor first.

    The average gratuity percentage only counts transactions with a
    positive base amount.
    """
    stats: Dict[str, DonorStats] = {}
    gratuity_samples: Dict[str, List[float]] = {}
    for txn in transactions:
        entry = stats.get(txn.user_id)
        if entry is None:
            profile = profiles.get(txn.user_id)
            entry = DonorStats(
                member_id=txn.user_id,
                member_name=(profile.full_name if profile else None) or ANONYMOUS,
                member_avatar=profile.avatar_url if profile else None,
                business_name=profile.business_name if profile else None,
            )
            stats[txn.user_id] = entry
            gratuity_samples[txn.user_id] = []

        donation = txn.voluntary_amount or 0.0
        entry.total_donated += donation
        entry.donation_count += 1
        if txn.base_amount and txn.base_amount > 0:
            samples = gratuity_samples[txn.user_id]
            samples.append(donation / txn.base_amount * 100)
            entry.average_gratuity_percentage = sum(samples) / len(samples)

    return sorted(stats.values(), key=lambda s: s.total_donated, reverse=True)


class LeaderboardService:
    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def board(self, since: Optional[datetime] = None, limit: int = LEADERBOARD_SIZE) -> List[DonorStats]:
        transactions = await self.repos.transactions.list_voluntary(since)
        profiles = await self.repos.profiles.get_many(txn.user_id for txn in transactions)
        return aggregate_donations(transactions, profiles)[:limit]

    async def load(self, now: Optional[datetime] = None) -> Leaderboards:
        """Top donors since the first of the current month and of all time."""
        monthly = await self.board(start_of_month(now or utc_now()))
        all_time = await self.board()
        logger.debug(f"Leaderboards: {len(monthly)} monthly, {len(all_time)} all-time donors")
        return Leaderboards(monthly=monthly, all_time=all_time)
