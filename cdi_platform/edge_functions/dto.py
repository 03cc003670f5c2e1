"""Request and response payloads for the hosted edge functions.

Field names follow the JSON contract of each function, so aliases are used
where the wire format is camelCase.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SmsNotificationRequest(BaseModel):
    """Body of ``send-sms-notification``."""

    type: str = Field(description="Message type, e.g. task-invitation, reminder")
    to: str = Field(description="Destination phone number")
    message: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class EmailRequest(BaseModel):
    """Body of ``send-email``."""

    to: str
    subject: str
    html: str
    text: Optional[str] = None


class CalendarSyncRequest(BaseModel):
    """Body of ``sync-calendar-events``."""

    event_ids: List[str]


class CalendarSyncResponse(BaseModel):
    """Result reported by ``sync-calendar-events``."""

    model_config = ConfigDict(extra="ignore")

    synced: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)


class CalendarDeleteRequest(BaseModel):
    """Body of ``delete-calendar-event``."""

    calendar_id: str
    event_id: str


class WorkspaceAccountRequest(BaseModel):
    """Body of ``create-workspace-account``."""

    model_config = ConfigDict(populate_by_name=True)

    profile_id: str = Field(alias="profileId")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    recovery_email: Optional[str] = Field(default=None, alias="recoveryEmail")


class WorkspaceAccountResponse(BaseModel):
    """Result reported by ``create-workspace-account``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    workspace_email: Optional[str] = Field(default=None, alias="workspaceEmail")
    success: bool = True
    temp_password: Optional[str] = Field(default=None, alias="tempPassword")
