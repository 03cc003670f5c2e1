"""Async HTTP client for backend hosted edge functions.

Each function is reached with ``POST {base_url}/functions/v1/{name}`` and a
bearer service key. The client converts transport and status failures into
``EdgeFunctionError`` so services handle one error type.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from .dto import (
    CalendarDeleteRequest,
    CalendarSyncRequest,
    CalendarSyncResponse,
    EmailRequest,
    SmsNotificationRequest,
    WorkspaceAccountRequest,
    WorkspaceAccountResponse,
)
from .errors import EdgeFunctionError, EdgeFunctionUnavailableError

SEND_SMS = "send-sms-notification"
SEND_EMAIL = "send-email"
SYNC_CALENDAR = "sync-calendar-events"
DELETE_CALENDAR_EVENT = "delete-calendar-event"
CREATE_WORKSPACE_ACCOUNT = "create-workspace-account"


class EdgeFunctionClient:
    """
    Thin async HTTP client for the backend's edge functions.

    Responsibilities:
    - invoke (generic JSON call)
    - send_sms / send_email
    - sync_calendar_events / delete_calendar_event
    - create_workspace_account
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
            headers["apikey"] = self.api_key
        return headers

    async def invoke(self, name: str, body: BaseModel | Dict[str, Any]) -> Any:
        """Call an edge function with a JSON body.

        Args:
            name: Function name
            body: Pydantic payload (dumped by alias) or plain dictionary

        Returns:
            Decoded JSON response, or None for an empty body

        Raises:
            EdgeFunctionError: non-2xx status or an ``error`` field in the body
            EdgeFunctionUnavailableError: no response was received
        """
        payload = body.model_dump(by_alias=True, mode="json", exclude_none=True) if isinstance(body, BaseModel) else body
        url = f"{self.base_url}/functions/v1/{name}"
        try:
            self._logger.debug("EdgeFunctionClient.invoke: POST %s", url)
            r = await self._client.post(url, headers=self._headers(), json=payload)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EdgeFunctionError(
                f"Edge function {name} failed: {e.response.status_code}",
                function_name=name,
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise EdgeFunctionUnavailableError(
                f"Edge function {name} unreachable: {e}",
                function_name=name,
            ) from e

        data = r.json() if r.content else None
        if isinstance(data, dict) and data.get("error"):
            raise EdgeFunctionError(
                f"Edge function {name} reported an error: {data['error']}",
                function_name=name,
                status_code=r.status_code,
                details=data,
            )
        self._logger.debug("EdgeFunctionClient.invoke: %s -> %s", name, r.status_code)
        return data

    async def send_sms(self, request: SmsNotificationRequest) -> Any:
        return await self.invoke(SEND_SMS, request)

    async def send_email(self, request: EmailRequest) -> Any:
        return await self.invoke(SEND_EMAIL, request)

    async def sync_calendar_events(self, event_ids: list[str]) -> CalendarSyncResponse:
        data = await self.invoke(SYNC_CALENDAR, CalendarSyncRequest(event_ids=event_ids))
        return CalendarSyncResponse.model_validate(data if isinstance(data, dict) else {})

    async def delete_calendar_event(self, calendar_id: str, event_id: str) -> Any:
        return await self.invoke(DELETE_CALENDAR_EVENT, CalendarDeleteRequest(calendar_id=calendar_id, event_id=event_id))

    async def create_workspace_account(self, request: WorkspaceAccountRequest) -> WorkspaceAccountResponse:
        data = await self.invoke(CREATE_WORKSPACE_ACCOUNT, request)
        return WorkspaceAccountResponse.model_validate(data if isinstance(data, dict) else {})

    async def aclose(self) -> None:
        await self._client.aclose()
