"""
SMS Endpoints.

Outbound notifications through the SMS edge function, the inbound webhook,
and per-business SMS settings.
"""

from fastapi import APIRouter

from cdi_platform.services.sms import IncomingSmsResult, SendResult, TaskInvitationSms
from cdi_platform.server.deps import SmsDep
from cdi_platform.server.schemas import (
    EstimateNotificationRequest,
    IncomingSms,
    ReminderRequest,
    SmsEnabledResponse,
    TaskInvitationSmsRequest,
)

router = APIRouter()


@router.post(
    "/task-invitation",
    response_model=SendResult,
    summary="Text Task Invitation",
    description="Text a team member about an assigned task with accept and decline links.",
    response_description="Whether the message was sent; failures carry the error.",
)
async def send_task_invitation(body: TaskInvitationSmsRequest, service: SmsDep) -> SendResult:
    data = TaskInvitationSms.model_validate(body.model_dump(exclude={"task_assignment_id"}))
    return await service.send_task_invitation(data, body.task_assignment_id)


@router.post(
    "/reminder",
    response_model=SendResult,
    summary="Text Reminder",
    description="Send a free-form reminder text.",
    response_description="Whether the message was sent.",
)
async def send_reminder(body: ReminderRequest, service: SmsDep) -> SendResult:
    return await service.send_reminder(body.phone_number, body.message, body.metadata)


@router.post(
    "/estimate-notification",
    response_model=SendResult,
    summary="Text Estimate Ready",
    description="Tell a customer their estimate is ready, with its total and link.",
    response_description="Whether the message was sent.",
)
async def send_estimate_notification(body: EstimateNotificationRequest, service: SmsDep) -> SendResult:
    return await service.send_estimate_notification(
        body.phone_number, body.customer_name, body.estimate_total, body.estimate_url
    )


@router.post(
    "/incoming",
    response_model=IncomingSmsResult,
    summary="Inbound SMS Webhook",
    description="Log an inbound text and return the reply. ACCEPT and DECLINE get dedicated replies.",
    response_description="Reply text.",
)
async def incoming_sms(body: IncomingSms, service: SmsDep) -> IncomingSmsResult:
    return await service.handle_incoming_sms(body.from_number, body.to, body.body)


@router.get(
    "/businesses/{business_id}/enabled",
    response_model=SmsEnabledResponse,
    summary="Check SMS Enabled",
    description="Whether the business has a phone integration with texting switched on.",
    response_description="SMS flag.",
)
async def sms_enabled(business_id: str, service: SmsDep) -> SmsEnabledResponse:
    return SmsEnabledResponse(business_id=business_id, sms_enabled=await service.is_sms_enabled(business_id))
