"""
Business Verification Endpoints.
"""

from fastapi import APIRouter

from cdi_platform.services.verification import VerificationResult
from cdi_platform.server.deps import VerificationDep
from cdi_platform.server.schemas import VerificationApproval

router = APIRouter()


@router.post(
    "/profiles/{profile_id}/approve",
    response_model=VerificationResult,
    summary="Approve Business Verification",
    description="Approve a member's business, assign a workspace email address and provision the account. "
    "A provisioning failure does not undo the approval; it is reported in the result.",
    response_description="Assigned address and provisioning outcome.",
    responses={400: {"description": "Notes missing"}, 404: {"description": "Profile not found"}},
)
async def approve(profile_id: str, body: VerificationApproval, service: VerificationDep) -> VerificationResult:
    return await service.approve_business_verification(profile_id, body.admin_notes)
