"""
SMS entity models.

Phone integrations hold a business's outbound number and whether texting is
switched on. Every message sent or received is appended to the message log.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, new_id, utc_now


class MessageDirection(str, Enum):
    """Direction of an SMS relative to the platform."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


class PhoneIntegration(Base, table=True):
    """Business phone number configuration.

    Table: phone_integrations
    """

    __tablename__ = "phone_integrations"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    business_id: str = Field(index=True, unique=True)
    phone_number: str
    phone_provider: str = Field(default="twilio")
    sms_enabled: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"PhoneIntegration(business_id={self.business_id}, number={self.phone_number})"


class SmsMessageLog(Base, table=True):
    """Record of one SMS message.

    Table: sms_message_logs
    """

    __tablename__ = "sms_message_logs"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=new_id, primary_key=True)
    direction: str = Field(description="inbound or outbound")
    from_number: str
    to_number: str
    message_body: str
    message_type: Optional[str] = Field(default=None, description="task-invitation, reminder, ...")
    message_status: str = Field(default="sent")
    task_assignment_id: Optional[str] = Field(default=None)
    estimate_id: Optional[str] = Field(default=None)
    customer_id: Optional[str] = Field(default=None)
    team_member_id: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"SmsMessageLog(id={self.id}, direction={self.direction}, to={self.to_number})"
