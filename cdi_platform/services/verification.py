"""Business verification approval.

Approving a business gives its owner an organisation mailbox
(``first.last@<workspace domain>``). The profile update is committed first;
provisioning the mailbox through the ``create-workspace-account`` edge
function can fail independently and is retried from the admin panel.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from pydantic import BaseModel

from cdi_platform.core.database.base import utc_now
from cdi_platform.core.database.entities.profiles import Profile, VerificationStatus
from cdi_platform.core.database.repositories.bundle import RepositoryBundle
from cdi_platform.core.errors import ConflictError, NotFoundError, ValidationError
from cdi_platform.edge_functions import EdgeFunctionClient, EdgeFunctionError
from cdi_platform.edge_functions.dto import WorkspaceAccountRequest

logger = logging.getLogger(__name__)

MAX_ADDRESS_ATTEMPTS = 100


class VerificationResult(BaseModel):
    profile_id: str
    workspace_email: str
    workspace_created: bool
    temp_password: Optional[str] = None
    workspace_error: Optional[str] = None


def _slug(value: Optional[str]) -> str:
    return re.sub(r"[^a-z0-9]", "", (value or "").lower())


def split_name(profile: Profile) -> tuple[str, str]:
    """First and last name, falling back to splitting ``full_name``."""
    if profile.first_name or profile.last_name:
        return profile.first_name or "", profile.last_name or ""
    parts = (profile.full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def workspace_local_part(first_name: str, last_name: str) -> str:
    first, last = _slug(first_name), _slug(last_name)
    if first and last:
        return f"{first}.{last}"
    return first or last


class VerificationService:
    """Approve business verifications and provision workspace accounts."""

    def __init__(self, repos: RepositoryBundle, edge: EdgeFunctionClient, *, workspace_domain: str) -> None:
        self.repos = repos
        self.edge = edge
        self.workspace_domain = workspace_domain

    async def generate_workspace_email(self, profile: Profile) -> str:
        """Pick a free ``first.last@domain`` address for a profile.

        A numeric suffix is added when the address already belongs to
        another profile.
        """
        local = workspace_local_part(*split_name(profile))
        if not local:
            raise ValidationError(f"Profile {profile.id} has no name to build a workspace address from")

        for attempt in range(MAX_ADDRESS_ATTEMPTS):
            candidate = f"{local}{attempt + 1 if attempt else ''}@{self.workspace_domain}"
            holder = await self.repos.profiles.get_by_workspace_email(candidate)
            if holder is None or holder.id == profile.id:
                return candidate
        raise ConflictError(f"No free workspace address for {local}@{self.workspace_domain}")

    async def approve_business_verification(self, profile_id: str, admin_notes: str) -> VerificationResult:
        """Approve a profile's business and create its workspace account.

        Args:
            profile_id: Profile being approved
            admin_notes: Reviewer notes, required

        Returns:
            The assigned address and the outcome of account provisioning
        """
        if not admin_notes or not admin_notes.strip():
            raise ValidationError('Please add approval notes (e.g., "All documents verified")')

        profile = await self.repos.profiles.get_by_id(profile_id)
        if profile is None:
            raise NotFoundError("Profile", profile_id)

        workspace_email = profile.workspace_email or await self.generate_workspace_email(profile)
        now = utc_now()
        profile.verification_status = VerificationStatus.APPROVED.value
        profile.admin_notes = admin_notes.strip()
        profile.workspace_email = workspace_email
        profile.verified_at = now
        profile.updated_at = now
        await self.repos.profiles.update(profile)
        logger.info(f"Business verification approved for profile {profile.id} ({workspace_email})")

        first_name, last_name = split_name(profile)
        try:
            account = await self.edge.create_workspace_account(
                WorkspaceAccountRequest(
                    profile_id=profile.id,
                    first_name=first_name,
                    last_name=last_name,
                    recovery_email=profile.email,
                )
            )
        except EdgeFunctionError as e:
            logger.warning(f"Workspace creation failed for profile {profile.id}: {e}")
            return VerificationResult(
                profile_id=profile.id,
                workspace_email=workspace_email,
                workspace_created=False,
                workspace_error=str(e),
            )

        return VerificationResult(
            profile_id=profile.id,
            workspace_email=account.workspace_email or workspace_email,
            workspace_created=account.success,
            temp_password=account.temp_password,
            workspace_error=None if account.success else "Workspace account was not created",
        )
