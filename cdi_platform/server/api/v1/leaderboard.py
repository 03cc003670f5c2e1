"""
Donor Leaderboard Endpoints.
"""

from fastapi import APIRouter

from cdi_platform.services.leaderboard import Leaderboards
from cdi_platform.server.deps import LeaderboardDep

router = APIRouter()


@router.get(
    "",
    response_model=Leaderboards,
    summary="Get Donor Leaderboards",
    description="Top ten donors since the first of the month and of all time.",
    response_description="Monthly and all-time boards.",
)
async def get_leaderboards(service: LeaderboardDep) -> Leaderboards:
    return await service.load()
