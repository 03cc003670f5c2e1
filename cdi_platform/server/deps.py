"""
FastAPI Dependencies.

Builds the per-request repository bundle and services, and the process-wide
edge function client and estimate generator. Tests replace any of these via
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cdi_platform.ai import EstimateGenerator
from cdi_platform.core.database.repositories import RepositoryBundle, build_repositories
from cdi_platform.core.database.session import get_session
from cdi_platform.edge_functions import EdgeFunctionClient
from cdi_platform.services import (
    CalendarService,
    InvitationService,
    LeaderboardService,
    SellerAnalyticsService,
    SmsService,
    TeamInboxService,
    ToolRentalService,
    VerificationService,
)

from .core.config import settings


@lru_cache(maxsize=1)
def get_edge_client() -> EdgeFunctionClient:
    """Shared edge function client; closed by the application lifespan."""
    config = settings.edge_functions
    return EdgeFunctionClient(
        config.url,
        api_key=config.api_key.get_secret_value() if config.api_key else None,
        timeout=config.timeout,
    )


@lru_cache(maxsize=1)
def get_estimate_generator() -> EstimateGenerator:
    return EstimateGenerator.from_config(settings.google_ai)


def get_repositories(session: AsyncSession = Depends(get_session)) -> RepositoryBundle:
    return build_repositories(session)


ReposDep = Annotated[RepositoryBundle, Depends(get_repositories)]
EdgeDep = Annotated[EdgeFunctionClient, Depends(get_edge_client)]
GeneratorDep = Annotated[EstimateGenerator, Depends(get_estimate_generator)]


def get_analytics_service(repos: ReposDep) -> SellerAnalyticsService:
    return SellerAnalyticsService(repos)


def get_tool_rental_service(repos: ReposDep) -> ToolRentalService:
    return ToolRentalService(repos)


def get_sms_service(repos: ReposDep, edge: EdgeDep) -> SmsService:
    return SmsService(repos, edge, app_base_url=settings.app.base_url)


def get_calendar_service(repos: ReposDep, edge: EdgeDep) -> CalendarService:
    return CalendarService(repos, edge)


def get_invitation_service(repos: ReposDep, edge: EdgeDep) -> InvitationService:
    return InvitationService(
        repos, edge, app_base_url=settings.app.base_url, expiry_days=settings.app.invitation_expiry_days
    )


def get_verification_service(repos: ReposDep, edge: EdgeDep) -> VerificationService:
    return VerificationService(repos, edge, workspace_domain=settings.app.workspace_domain)


def get_leaderboard_service(repos: ReposDep) -> LeaderboardService:
    return LeaderboardService(repos)


def get_team_inbox_service(repos: ReposDep) -> TeamInboxService:
    return TeamInboxService(repos)


AnalyticsDep = Annotated[SellerAnalyticsService, Depends(get_analytics_service)]
ToolRentalDep = Annotated[ToolRentalService, Depends(get_tool_rental_service)]
SmsDep = Annotated[SmsService, Depends(get_sms_service)]
CalendarDep = Annotated[CalendarService, Depends(get_calendar_service)]
InvitationDep = Annotated[InvitationService, Depends(get_invitation_service)]
VerificationDep = Annotated[VerificationService, Depends(get_verification_service)]
LeaderboardDep = Annotated[LeaderboardService, Depends(get_leaderboard_service)]
TeamInboxDep = Annotated[TeamInboxService, Depends(get_team_inbox_service)]
