"""
Batched Invitation Endpoints.

Bundle tasks per team member, send the bundle by email or SMS, and record
the member's answer through the invitation token.
"""

from typing import List

from fastapi import APIRouter

from cdi_platform.core.database.entities.teams import BatchedInvitation
from cdi_platform.services.invitations import InvitationView, SendAllResult
from cdi_platform.server.deps import InvitationDep
from cdi_platform.server.schemas import BatchCreate, InvitationSent, LinkTaskRequest

router = APIRouter()


@router.post(
    "/batches",
    response_model=BatchedInvitation,
    summary="Create Or Update Batch",
    description="Return the member's open batch, creating one with a fresh token and expiry if none exists.",
    response_description="The open batch.",
)
async def create_or_update_batch(body: BatchCreate, service: InvitationDep) -> BatchedInvitation:
    return await service.create_or_update_batch(body.business_id, body.team_member_id)


@router.post(
    "/batches/{batch_id}/tasks",
    response_model=BatchedInvitation,
    summary="Add Task To Batch",
    description="Attach a task assignment to the batch and recompute its totals.",
    response_description="The batch with refreshed totals.",
    responses={404: {"description": "Task or batch not found"}},
)
async def link_task(batch_id: str, body: LinkTaskRequest, service: InvitationDep) -> BatchedInvitation:
    return await service.link_task_to_batch(body.task_id, batch_id)


@router.post(
    "/batches/{batch_id}/send-email",
    response_model=InvitationSent,
    summary="Email Invitation",
    description="Email the invitation link to the team member and mark the batch sent.",
    response_description="The invitation URL.",
    responses={
        400: {"description": "Team member has no email"},
        404: {"description": "Batch not found"},
        502: {"description": "Email function failed"},
    },
)
async def send_email(batch_id: str, service: InvitationDep) -> InvitationSent:
    return InvitationSent(batch_id=batch_id, invitation_url=await service.send_invitation_email(batch_id))


@router.post(
    "/batches/{batch_id}/send-sms",
    response_model=InvitationSent,
    summary="Text Invitation",
    description="Text the invitation link to the team member and mark the batch sent.",
    response_description="The invitation URL.",
    responses={
        400: {"description": "Team member has no phone"},
        404: {"description": "Batch not found"},
        502: {"description": "SMS function failed"},
    },
)
async def send_sms(batch_id: str, service: InvitationDep) -> InvitationSent:
    return InvitationSent(batch_id=batch_id, invitation_url=await service.send_invitation_sms(batch_id))


@router.get(
    "/businesses/{business_id}",
    response_model=List[InvitationView],
    summary="List Business Invitations",
    description="Every batch of a business with the member's contact details, newest first.",
    response_description="Invitations.",
)
async def list_for_business(business_id: str, service: InvitationDep) -> List[InvitationView]:
    return await service.get_business_invitations(business_id)


@router.post(
    "/businesses/{business_id}/send-pending",
    response_model=SendAllResult,
    summary="Send All Pending",
    description="Send every pending batch of a business over every channel the member has on file.",
    response_description="Sent and failed counts.",
)
async def send_all_pending(business_id: str, service: InvitationDep) -> SendAllResult:
    return await service.send_all_pending(business_id)


@router.get(
    "/tokens/{token}",
    response_model=BatchedInvitation,
    summary="Get Invitation",
    description="Look up a batch by its invitation token.",
    response_description="The batch.",
    responses={404: {"description": "Unknown token"}},
)
async def get_by_token(token: str, service: InvitationDep) -> BatchedInvitation:
    return await service.get_by_token(token)


@router.post(
    "/tokens/{token}/accept",
    response_model=BatchedInvitation,
    summary="Accept Invitation",
    description="Accept every task in the batch.",
    response_description="The answered batch.",
    responses={400: {"description": "Expired or already answered"}, 404: {"description": "Unknown token"}},
)
async def accept(token: str, service: InvitationDep) -> BatchedInvitation:
    return await service.accept_batch(token)


@router.post(
    "/tokens/{token}/decline",
    response_model=BatchedInvitation,
    summary="Decline Invitation",
    description="Decline every task in the batch.",
    response_description="The answered batch.",
    responses={400: {"description": "Expired or already answered"}, 404: {"description": "Unknown token"}},
)
async def decline(token: str, service: InvitationDep) -> BatchedInvitation:
    return await service.decline_batch(token)
