"""Batched team invitations.

A business bundles every task it offers a team member into one batch, so
the member gets a single link per round of work. The link carries an
unguessable token; accepting or declining the batch answers every task in
it.
"""

from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities.teams import (
    AssignmentStatus,
    BatchedInvitation,
    Business,
    InvitationStatus,
    TeamMember,
)
from cdi_platform.core.database.repositories.bundle import RepositoryBundle
from cdi_platform.core.errors import ConflictError, NotFoundError, ValidationError
from cdi_platform.core.monitoring import log_notification
from cdi_platform.edge_functions import EdgeFunctionClient, EdgeFunctionError
from cdi_platform.edge_functions.dto import EmailRequest, SmsNotificationRequest

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
_OPEN_STATUSES = (InvitationStatus.PENDING.value, InvitationStatus.SENT.value)


def generate_token() -> str:
    """64 hex characters from 32 random bytes."""
    return secrets.token_hex(TOKEN_BYTES)


def invitation_url(app_base_url: str, token: str) -> str:
    return f"{app_base_url.rstrip('/')}/invitation/{token}"


def render_invitation_email(batch: BatchedInvitation, member: TeamMember, business: Business, url: str) -> str:
    expires = batch.expires_at.strftime("%m/%d/%Y") if batch.expires_at else "soon"
    return f"""
<h2>Work Invitation from {business.name}</h2>
<p>Hello {member.full_name},</p>
<p>You have been invited to work on {batch.total_tasks} task(s) with a total payment of ${batch.total_amount:.2f}.</p>
<p><strong>Click the link below to view details and respond:</strong></p>
<p><a href="{url}" style="display: inline-block; padding: 12px 24px; background-color: #2563eb; color: white; text-decoration: none; border-radius: 6px;">View Invitation</a></p>
<p>Or copy this link: {url}</p>
<p>This invitation expires on {expires}.</p>
<hr />
<p><small>Contact {business.name} at {business.email or ''} or {business.phone or ''} with questions.</small></p>
"""


def render_invitation_sms(batch: BatchedInvitation, business: Business, url: str) -> str:
    return (
        f"{business.name}: You have {batch.total_tasks} new task(s) worth "
        f"${batch.total_amount:.2f}. View & respond: {url}"
    )


class InvitationView(BaseModel):
    invitation: BatchedInvitation
    team_member_name: Optional[str] = None
    team_member_email: Optional[str] = None
    team_member_phone: Optional[str] = None


class SendAllResult(BaseModel):
    success: bool
    sent: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


class InvitationService:
    """Create, send and answer batched invitations."""

    def __init__(
        self,
        repos: RepositoryBundle,
        edge: EdgeFunctionClient,
        *,
        app_base_url: str,
        expiry_days: int = 7,
    ) -> None:
        self.repos = repos
        self.edge = edge
        self.app_base_url = app_base_url
        self.expiry_days = expiry_days

    async def _batch(self, batch_id: str) -> BatchedInvitation:
        batch = await self.repos.invitations.get_by_id(batch_id)
        if batch is None:
            raise NotFoundError("Batched invitation", batch_id)
        return batch

    async def _context(self, batch_id: str) -> Tuple[BatchedInvitation, TeamMember, Business]:
        batch = await self._batch(batch_id)
        member = await self.repos.team_members.get_by_id(batch.team_member_id)
        if member is None:
            raise NotFoundError("Team member", batch.team_member_id)
        business = await self.repos.businesses.get_by_id(batch.business_id)
        if business is None:
            raise NotFoundError("Business", batch.business_id)
        return batch, member, business

    async def create_or_update_batch(self, business_id: str, team_member_id: str) -> BatchedInvitation:
        """Return the member's open batch, creating one if needed.

        An existing pending batch is touched rather than replaced so links
        already shared keep working.
        """
        existing = await self.repos.invitations.get_open_for_member(business_id, team_member_id)
        now = utc_now()
        if existing:
            existing.updated_at = now
            return await self.repos.invitations.update(existing)

        batch = BatchedInvitation(
            business_id=business_id,
            team_member_id=team_member_id,
            invitation_token=generate_token(),
            status=InvitationStatus.PENDING.value,
            expires_at=now + timedelta(days=self.expiry_days),
        )
        logger.info(f"Creating batched invitation for member {team_member_id} of business {business_id}")
        return await self.repos.invitations.create(batch)

    async def link_task_to_batch(self, task_id: str, batch_id: str) -> BatchedInvitation:
        """Attach a task assignment to a batch and refresh the batch totals."""
        task = await self.repos.task_assignments.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task assignment", task_id)
        batch = await self._batch(batch_id)

        task.batch_invitation_id = batch.id
        await self.repos.task_assignments.update(task)
        return await self.recalculate_totals(batch)

    async def recalculate_totals(self, batch: BatchedInvitation) -> BatchedInvitation:
        tasks = await self.repos.task_assignments.list_for_batch(batch.id)
        batch.total_tasks = len(tasks)
        batch.total_amount = sum(task.assigned_cost for task in tasks)
        batch.updated_at = utc_now()
        return await self.repos.invitations.update(batch)

    async def _mark_sent(self, batch: BatchedInvitation, *, email: bool = False, sms: bool = False) -> None:
        batch.status = InvitationStatus.SENT.value
        batch.sent_at = utc_now()
        batch.updated_at = batch.sent_at
        batch.email_sent = batch.email_sent or email
        batch.sms_sent = batch.sms_sent or sms
        await self.repos.invitations.update(batch)

    async def send_invitation_email(self, batch_id: str) -> str:
        """Email the invitation link to the member.

        Returns:
            The invitation URL
        """
        batch, member, business = await self._context(batch_id)
        if not member.email:
            raise ValidationError(f"Team member {member.id} has no email address")

        url = invitation_url(self.app_base_url, batch.invitation_token)
        await self.edge.send_email(
            EmailRequest(
                to=member.email,
                subject=f"Work Invitation from {business.name}",
                html=render_invitation_email(batch, member, business, url),
                text=render_invitation_sms(batch, business, url),
            )
        )
        await self._mark_sent(batch, email=True)
        log_notification("email", "batch-invitation", True)
        logger.info(f"Invitation {batch.id} emailed to {member.email}")
        return url

    async def send_invitation_sms(self, batch_id: str) -> str:
        """Text the invitation link to the member.

        Returns:
            The invitation URL
        """
        batch, member, business = await self._context(batch_id)
        if not member.phone:
            raise ValidationError(f"Team member {member.id} has no phone number")

        url = invitation_url(self.app_base_url, batch.invitation_token)
        await self.edge.send_sms(
            SmsNotificationRequest(
                type="batch-invitation",
                to=member.phone,
                message=render_invitation_sms(batch, business, url),
                metadata={"batch_invitation_id": batch.id, "team_member_id": member.id},
            )
        )
        await self._mark_sent(batch, sms=True)
        log_notification("sms", "batch-invitation", True)
        logger.info(f"Invitation {batch.id} texted to {member.phone}")
        return url

    async def send_all_pending(self, business_id: str) -> SendAllResult:
        """Send every pending batch of a business by email and/or SMS.

        A batch counts as sent when at least one channel succeeded.
        """
        batches = [
            b for b in await self.repos.invitations.list_for_business(business_id)
            if b.status == InvitationStatus.PENDING.value
        ]
        members = await self.repos.team_members.get_many(b.team_member_id for b in batches)
        result = SendAllResult(success=True)
        for batch in batches:
            member = members.get(batch.team_member_id)
            name = member.full_name if member else batch.team_member_id
            channels = []
            if member and member.email:
                channels.append(self.send_invitation_email)
            if member and member.phone:
                channels.append(self.send_invitation_sms)
            if not channels:
                result.failed += 1
                result.errors.append(f"{name}: no email or phone on file")
                continue

            delivered = False
            for send in channels:
                try:
                    await send(batch.id)
                    delivered = True
                except EdgeFunctionError as e:
                    result.errors.append(f"{name}: {e}")
            if delivered:
                result.sent += 1
            else:
                result.failed += 1
        result.success = result.failed == 0
        return result

    async def get_business_invitations(self, business_id: str) -> List[InvitationView]:
        """Invitations of a business with member contact details, newest first."""
        batches = await self.repos.invitations.list_for_business(business_id)
        members = await self.repos.team_members.get_many(b.team_member_id for b in batches)
        views = []
        for batch in batches:
            member = members.get(batch.team_member_id)
            views.append(
                InvitationView(
                    invitation=batch,
                    team_member_name=member.full_name if member else None,
                    team_member_email=member.email if member else None,
                    team_member_phone=member.phone if member else None,
                )
            )
        return views

    async def get_by_token(self, token: str) -> BatchedInvitation:
        batch = await self.repos.invitations.get_by_token(token)
        if batch is None:
            raise NotFoundError("Invitation", token)
        return batch

    async def _respond(self, token: str, invitation_status: InvitationStatus, task_status: AssignmentStatus) -> BatchedInvitation:
        batch = await self.get_by_token(token)
        now = utc_now()
        if batch.status not in _OPEN_STATUSES:
            raise ConflictError(f"Invitation already {batch.status}")
        if batch.expires_at is not None and batch.expires_at < now:
            batch.status = InvitationStatus.EXPIRED.value
            batch.updated_at = now
            await self.repos.invitations.update(batch)
            raise ConflictError("Invitation has expired")

        await self.repos.task_assignments.set_status_for_batch(batch.id, task_status.value, now)
        batch.status = invitation_status.value
        batch.responded_at = now
        batch.updated_at = now
        await self.repos.invitations.update(batch)
        logger.info(f"Invitation {batch.id} {invitation_status.value}")
        return batch

    async def accept_batch(self, token: str) -> BatchedInvitation:
        return await self._respond(token, InvitationStatus.ACCEPTED, AssignmentStatus.ACCEPTED)

    async def decline_batch(self, token: str) -> BatchedInvitation:
        return await self._respond(token, InvitationStatus.DECLINED, AssignmentStatus.DECLINED)
