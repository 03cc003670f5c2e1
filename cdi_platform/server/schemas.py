"""
API Schemas.

This module contains Pydantic models used for API request bodies and response
validation where the service layer's own models do not already fit.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cdi_platform.core.database.entities.calendar_events import SyncStatus
from cdi_platform.core.database.entities.teams import AssignmentStatus


# ============================================================================
# Tool rentals
# ============================================================================


class RentalCreate(BaseModel):
    """Start a rent-to-own agreement."""

    member_id: str = Field(..., description="Profile id of the renting member.")
    tool_id: str = Field(..., description="Tool to rent; must be available.")


class TradeInRequest(BaseModel):
    """Trade an active rental in for another tool."""

    new_tool_id: str = Field(..., description="Tool to rent instead.")
    credit_percentage: Optional[float] = Field(
        default=None,
        ge=0,
        description="Credit tier the member expects. Defaults to the tier the agreement has earned.",
        examples=[50],
    )


class RepairCreate(BaseModel):
    issue_description: str = Field(..., description="What is wrong with the tool.", examples=["Chuck slips under load"])


# ============================================================================
# Estimates
# ============================================================================


class EstimateFromDescription(BaseModel):
    description: str = Field(..., min_length=1, description="Free-text project description.")
    zip_code: str = Field(..., description="Project ZIP code, used for regional pricing.", examples=["98101"])


class EstimateFromImages(EstimateFromDescription):
    images: List[str] = Field(
        default_factory=list,
        description="Project photos as data URLs. With no photos the text-only flow is used.",
    )


class CompletionRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Prompt sent as-is to the model.")


class CompletionResponse(BaseModel):
    text: str


class TaskMatchResponse(BaseModel):
    """Known task a description maps to; all fields are null when nothing matches."""

    task_key: Optional[str] = None
    task_name: Optional[str] = None
    category: Optional[str] = None


class ImageRequest(BaseModel):
    image: str = Field(..., description="Image as a data URL.")
    target_dimension: int = Field(default=1024, gt=0, le=4096, description="Side of the padded square in pixels.")


class CropRequest(ImageRequest):
    original_width: int = Field(..., gt=0)
    original_height: int = Field(..., gt=0)


class MarkRequest(BaseModel):
    image: str = Field(..., description="Padded square image as a data URL.")
    x_percent: float = Field(..., ge=0, le=100, description="Horizontal position across the original photo.")
    y_percent: float = Field(..., ge=0, le=100, description="Vertical position down the original photo.")
    original_width: int = Field(..., gt=0)
    original_height: int = Field(..., gt=0)


class ImageResponse(BaseModel):
    image: str = Field(..., description="Result as a JPEG data URL.")
    width: int
    height: int


# ============================================================================
# SMS
# ============================================================================


class TaskInvitationSmsRequest(BaseModel):
    to: str
    team_member_name: str
    task_description: str
    estimate_id: str
    line_item_cost: float
    business_name: str
    task_assignment_id: str
    accept_url: Optional[str] = None
    decline_url: Optional[str] = None


class ReminderRequest(BaseModel):
    phone_number: str
    message: str = Field(..., min_length=1)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class EstimateNotificationRequest(BaseModel):
    phone_number: str
    customer_name: str
    estimate_total: float
    estimate_url: str


class IncomingSms(BaseModel):
    """Webhook body posted by the SMS provider."""

    model_config = ConfigDict(populate_by_name=True)

    from_number: str = Field(..., alias="from")
    to: str
    body: str
    message_id: Optional[str] = Field(default=None, alias="messageId")


class SmsEnabledResponse(BaseModel):
    business_id: str
    sms_enabled: bool


# ============================================================================
# Calendar
# ============================================================================


class EventStatusUpdate(BaseModel):
    status: SyncStatus
    google_event_id: Optional[str] = None
    error: Optional[str] = None


# ============================================================================
# Invitations
# ============================================================================


class BatchCreate(BaseModel):
    business_id: str
    team_member_id: str


class LinkTaskRequest(BaseModel):
    task_id: str = Field(..., description="Task assignment to add to the batch.")


class InvitationSent(BaseModel):
    batch_id: str
    invitation_url: str


# ============================================================================
# Verification and inbox
# ============================================================================


class VerificationApproval(BaseModel):
    admin_notes: str = Field(..., description="Reviewer notes, required.", examples=["All documents verified"])


class AssignmentResponse(BaseModel):
    status: AssignmentStatus = Field(..., description="accepted or declined")
