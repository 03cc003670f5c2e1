"""Team member inbox.

Shows a team member the tasks they have been offered, grouped per estimate,
and records their answers.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities.teams import AssignmentStatus, Business, Estimate, TaskAssignment
from cdi_platform.core.database.repositories.bundle import RepositoryBundle
from cdi_platform.core.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class InviteStatus(str, Enum):
    """Overall answer to the tasks offered for one estimate."""

    PENDING = "pending"
    PARTIAL = "partial"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class GroupedInvite(BaseModel):
    estimate_id: str
    project_name: Optional[str] = None
    client_name: Optional[str] = None
    business_name: Optional[str] = None
    created_at: Optional[datetime] = None
    assignments: List[TaskAssignment] = Field(default_factory=list)
    total_cost: float = 0.0
    status: InviteStatus = InviteStatus.PENDING


def invite_status(assignments: List[TaskAssignment]) -> InviteStatus:
    statuses = [a.status for a in assignments]
    if statuses and all(s == AssignmentStatus.ACCEPTED.value for s in statuses):
        return InviteStatus.ACCEPTED
    if statuses and all(s == AssignmentStatus.DECLINED.value for s in statuses):
        return InviteStatus.DECLINED
    if any(s in (AssignmentStatus.ACCEPTED.value, AssignmentStatus.DECLINED.value) for s in statuses):
        return InviteStatus.PARTIAL
    return InviteStatus.PENDING


def group_invites(
    assignments: List[TaskAssignment],
    estimates: Optional[Dict[str, Estimate]] = None,
    businesses: Optional[Dict[str, Business]] = None,
) -> List[GroupedInvite]:
    """Group assignments by estimate, keeping the order they arrive in."""
    estimates = estimates or {}
    businesses = businesses or {}
    grouped: Dict[str, GroupedInvite] = {}
    for assignment in assignments:
        invite = grouped.get(assignment.estimate_id)
        if invite is None:
            estimate = estimates.get(assignment.estimate_id)
            business = businesses.get(estimate.business_id) if estimate else None
            invite = GroupedInvite(
                estimate_id=assignment.estimate_id,
                project_name=estimate.project_name if estimate else None,
                client_name=estimate.client_name if estimate else None,
                business_name=business.name if business else None,
                created_at=estimate.created_at if estimate else None,
            )
            grouped[assignment.estimate_id] = invite
        invite.assignments.append(assignment)
        invite.total_cost += assignment.assigned_cost or 0.0

    for invite in grouped.values():
        invite.status = invite_status(invite.assignments)
    return list(grouped.values())


class TeamInboxService:
    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def load_inbox(self, user_id: str, status_filter: Optional[InviteStatus] = None) -> List[GroupedInvite]:
        """Offers for the team member linked to a login, newest first.

        Args:
            user_id: Profile id of the logged in member
            status_filter: Only return invites in this overall status

        Returns:
            Grouped invites; empty when the user is not on any team
        """
        member = await self.repos.team_members.get_by_user_id(user_id)
        if member is None:
            return []

        assignments = await self.repos.task_assignments.list_for_member(member.id)
        estimates = await self.repos.estimates.get_many(a.estimate_id for a in assignments)
        businesses = await self.repos.businesses.get_many(e.business_id for e in estimates.values())
        invites = group_invites(assignments, estimates, businesses)
        if status_filter is not None:
            invites = [invite for invite in invites if invite.status == InviteStatus(status_filter)]
        return invites

    async def respond(self, assignment_id: str, status: AssignmentStatus) -> TaskAssignment:
        status = AssignmentStatus(status)
        if status not in (AssignmentStatus.ACCEPTED, AssignmentStatus.DECLINED):
            raise ValidationError(f"Response must be accepted or declined, got {status.value}")

        assignment = await self.repos.task_assignments.get_by_id(assignment_id)
        if assignment is None:
            raise NotFoundError("Task assignment", assignment_id)
        assignment.status = status.value
        assignment.responded_at = utc_now()
        logger.info(f"Task assignment {assignment_id} {status.value}")
        return await self.repos.task_assignments.update(assignment)

    async def respond_to_estimate(self, user_id: str, estimate_id: str, status: AssignmentStatus) -> List[TaskAssignment]:
        """Answer every still-open task the member was offered on one estimate."""
        member = await self.repos.team_members.get_by_user_id(user_id)
        if member is None:
            raise NotFoundError("Team member for user", user_id)
        assignments = await self.repos.task_assignments.list_for_member(member.id)
        pending = [
            a for a in assignments
            if a.estimate_id == estimate_id and a.status == AssignmentStatus.INVITED.value
        ]
        return [await self.respond(a.id, status) for a in pending]
