"""SMS notifications.

Messages are sent through the ``send-sms-notification`` edge function and
every successful send is appended to ``sms_message_logs``. Sending never
raises: callers get a ``SendResult`` and decide whether a failed text matters.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from cdi_platform.core.database.entities.sms import MessageDirection, PhoneIntegration, SmsMessageLog
from cdi_platform.core.database.repositories.bundle import RepositoryBundle
from cdi_platform.core.monitoring import log_notification
from cdi_platform.edge_functions import EdgeFunctionClient, EdgeFunctionError
from cdi_platform.edge_functions.dto import SmsNotificationRequest

logger = logging.getLogger(__name__)

SYSTEM_SENDER = "system"

REPLY_ACCEPTED = "Task accepted! Thank you."
REPLY_DECLINED = "Task declined. We'll find someone else. Thanks for letting us know!"
REPLY_GENERIC = "Message received. We'll get back to you soon!"


class MessageType:
    TASK_INVITATION = "task-invitation"
    REMINDER = "reminder"
    ESTIMATE_NOTIFICATION = "estimate-notification"
    BATCH_INVITATION = "batch-invitation"
    GENERAL = "general"


class SendResult(BaseModel):
    success: bool
    error: Optional[str] = None


class IncomingSmsResult(BaseModel):
    success: bool
    response: Optional[str] = None


class TaskInvitationSms(BaseModel):
    """Details needed to text a team member about an assigned task."""

    to: str = Field(description="Destination phone number")
    team_member_name: str
    task_description: str
    estimate_id: str
    line_item_cost: float
    business_name: str
    accept_url: Optional[str] = None
    decline_url: Optional[str] = None


def format_phone_number(phone: str) -> str:
    """Normalize a US number to E.164; other formats pass through."""
    digits = re.sub(r"\D", "", phone)
    if len(digits) == 10:
        return f"+1{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"
    return phone


def is_valid_phone_number(phone: str) -> bool:
    return 10 <= len(re.sub(r"\D", "", phone)) <= 15


def build_task_invitation_message(data: TaskInvitationSms, app_base_url: str) -> str:
    accept_url = data.accept_url or f"{app_base_url}/accept-task"
    decline_url = data.decline_url or f"{app_base_url}/decline-task"
    return (
        f"Hi {data.team_member_name}! {data.business_name} has assigned you to: "
        f"{data.task_description} (${data.line_item_cost:.2f}).\n\n"
        f"Accept: {accept_url}\n"
        f"Decline: {decline_url}\n\n"
        "Reply ACCEPT or DECLINE to respond."
    )


def build_estimate_message(customer_name: str, estimate_total: float, estimate_url: str) -> str:
    return f"Hi {customer_name}! Your estimate is ready. Total: ${estimate_total:.2f}. View it here: {estimate_url}"


def reply_for(body: str) -> str:
    """Canned reply for an inbound text."""
    command = body.strip().upper()
    if command == "ACCEPT":
        return REPLY_ACCEPTED
    if command == "DECLINE":
        return REPLY_DECLINED
    return REPLY_GENERIC


class SmsService:
    """Send and log SMS notifications."""

    def __init__(self, repos: RepositoryBundle, edge: EdgeFunctionClient, *, app_base_url: str) -> None:
        self.repos = repos
        self.edge = edge
        self.app_base_url = app_base_url.rstrip("/")

    async def _send(
        self, message_type: str, to: str, message: str, metadata: Optional[Dict[str, Any]] = None, **log_fields: Any
    ) -> SendResult:
        if not is_valid_phone_number(to):
            logger.warning(f"Not sending {message_type} SMS to invalid number {to!r}")
            return SendResult(success=False, error=f"Invalid phone number: {to}")
        to = format_phone_number(to)
        try:
            await self.edge.send_sms(
                SmsNotificationRequest(type=message_type, to=to, message=message, metadata=metadata or {})
            )
        except EdgeFunctionError as e:
            logger.error(f"SMS sending error ({message_type} to {to}): {e}")
            log_notification("sms", message_type, False, str(e))
            return SendResult(success=False, error=str(e))

        log_notification("sms", message_type, True)
        await self._log(
            direction=MessageDirection.OUTBOUND.value,
            from_number=SYSTEM_SENDER,
            to_number=to,
            message_body=message,
            message_type=message_type,
            **log_fields,
        )
        return SendResult(success=True)

    async def _log(self, **fields: Any) -> None:
        """Append to the message log; failures are logged and swallowed."""
        try:
            await self.repos.sms_logs.create(SmsMessageLog(**fields))
        except SQLAlchemyError as e:
            await self.repos.session.rollback()
            logger.error(f"Error logging SMS: {e}")

    async def send_task_invitation(self, data: TaskInvitationSms, task_assignment_id: str) -> SendResult:
        return await self._send(
            MessageType.TASK_INVITATION,
            data.to,
            build_task_invitation_message(data, self.app_base_url),
            {
                "task_assignment_id": task_assignment_id,
                "estimate_id": data.estimate_id,
                "team_member_name": data.team_member_name,
            },
            task_assignment_id=task_assignment_id,
            estimate_id=data.estimate_id,
        )

    async def send_reminder(self, phone_number: str, message: str, metadata: Optional[Dict[str, Any]] = None) -> SendResult:
        """Send a free-form reminder.

        Known log columns in ``metadata`` (``task_assignment_id``,
        ``estimate_id``, ``customer_id``, ``team_member_id``) are copied onto
        the log row.
        """
        log_fields = {k: v for k, v in (metadata or {}).items() if k in _LOG_LINK_COLUMNS}
        return await self._send(MessageType.REMINDER, phone_number, message, metadata, **log_fields)

    async def send_estimate_notification(
        self, phone_number: str, customer_name: str, estimate_total: float, estimate_url: str
    ) -> SendResult:
        return await self._send(
            MessageType.ESTIMATE_NOTIFICATION,
            phone_number,
            build_estimate_message(customer_name, estimate_total, estimate_url),
            {"customer_name": customer_name, "estimate_total": estimate_total},
        )

    async def get_phone_integration(self, business_id: str) -> Optional[PhoneIntegration]:
        return await self.repos.phone_integrations.get_by_business(business_id)

    async def is_sms_enabled(self, business_id: str) -> bool:
        integration = await self.get_phone_integration(business_id)
        return bool(integration and integration.sms_enabled)

    async def handle_incoming_sms(self, from_number: str, to_number: str, body: str) -> IncomingSmsResult:
        """Log an inbound text and pick the reply.

        ``ACCEPT`` and ``DECLINE`` are recognised regardless of case or
        surrounding whitespace.
        """
        await self._log(
            direction=MessageDirection.INBOUND.value,
            from_number=from_number,
            to_number=to_number,
            message_body=body,
            message_type=MessageType.GENERAL,
            message_status="received",
        )
        return IncomingSmsResult(success=True, response=reply_for(body))


_LOG_LINK_COLUMNS = ("task_assignment_id", "estimate_id", "customer_id", "team_member_id")
