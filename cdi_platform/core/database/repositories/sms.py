"""
SMS repositories.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.sms import PhoneIntegration, SmsMessageLog
from .base import SqlModelRepository


class PhoneIntegrationRepository(SqlModelRepository[PhoneIntegration]):
    """Repository for business phone integrations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PhoneIntegration)

    async def get_by_business(self, business_id: str) -> Optional[PhoneIntegration]:
        stmt = select(PhoneIntegration).where(PhoneIntegration.business_id == business_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class SmsMessageLogRepository(SqlModelRepository[SmsMessageLog]):
    """Repository for the SMS message log."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SmsMessageLog)
