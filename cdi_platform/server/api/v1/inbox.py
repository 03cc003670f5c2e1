"""
Team Inbox Endpoints.

Task offers for a team member grouped per estimate, and the member's
answers.
"""

from typing import List, Optional

from fastapi import APIRouter, Query

from cdi_platform.core.database.entities.teams import TaskAssignment
from cdi_platform.services.team_inbox import GroupedInvite, InviteStatus
from cdi_platform.server.deps import TeamInboxDep
from cdi_platform.server.schemas import AssignmentResponse

router = APIRouter()


@router.get(
    "/users/{user_id}",
    response_model=List[GroupedInvite],
    summary="Load Inbox",
    description="Offers for the team member linked to a login, grouped per estimate. Empty when the user is on no team.",
    response_description="Grouped invites.",
)
async def load_inbox(
    user_id: str,
    service: TeamInboxDep,
    status: Optional[InviteStatus] = Query(default=None, description="pending, partial, accepted or declined"),
) -> List[GroupedInvite]:
    return await service.load_inbox(user_id, status)


@router.post(
    "/assignments/{assignment_id}/respond",
    response_model=TaskAssignment,
    summary="Answer Task",
    description="Accept or decline one offered task.",
    response_description="The updated assignment.",
    responses={400: {"description": "Invalid response"}, 404: {"description": "Assignment not found"}},
)
async def respond(assignment_id: str, body: AssignmentResponse, service: TeamInboxDep) -> TaskAssignment:
    return await service.respond(assignment_id, body.status)


@router.post(
    "/users/{user_id}/estimates/{estimate_id}/respond",
    response_model=List[TaskAssignment],
    summary="Answer All Tasks For Estimate",
    description="Accept or decline every still-open task offered on one estimate.",
    response_description="The updated assignments.",
    responses={404: {"description": "User is not a team member"}},
)
async def respond_to_estimate(
    user_id: str, estimate_id: str, body: AssignmentResponse, service: TeamInboxDep
) -> List[TaskAssignment]:
    return await service.respond_to_estimate(user_id, estimate_id, body.status)
