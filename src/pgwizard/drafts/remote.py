"""HTTP draft gateway backed by httpx."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from pgwizard.config import DEFAULT_BACKEND_URL, DEFAULT_TIMEOUT_S
from pgwizard.drafts.client import (
    parse_action_response,
    parse_create_response,
    parse_fetch_response,
    parse_list_response,
)
from pgwizard.drafts.types import (
    ActionResult,
    CreateDraftResult,
    DraftApiError,
    DraftListResult,
    DraftTimeoutError,
    FetchDraftResult,
)

logger = logging.getLogger(__name__)


class HttpDraftGateway:
    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        auth_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url or DEFAULT_BACKEND_URL
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout_s,
            headers=headers,
            transport=transport,
        )

    async def create_draft(self, kind: str) -> CreateDraftResult:
        payload = await self._request("POST", "/createListingDraft", json={"kind": kind})
        return parse_create_response(payload)

    async def update_draft(self, draft_id: str, snapshot: Mapping[str, Any]) -> ActionResult:
        body = {"id": draft_id, **snapshot}
        payload = await self._request("PATCH", "/updateListingDraft", json=body)
        return parse_action_response(payload, "Failed to update draft")

    async def fetch_draft(self, draft_id: str) -> FetchDraftResult:
        payload = await self._request("GET", f"/listingDraft/{draft_id}")
        return parse_fetch_response(payload, draft_id)

    async def list_drafts(self) -> DraftListResult:
        payload = await self._request("GET", "/listingDraft")
        return parse_list_response(payload)

    async def delete_draft(self, draft_id: str) -> ActionResult:
        payload = await self._request("DELETE", "/deleteListingDraft", json={"id": draft_id})
        return parse_action_response(payload, "Failed to delete draft")

    async def publish_listing(self, payload: Mapping[str, Any]) -> ActionResult:
        response = await self._request("POST", "/api/pg-hostel/publishPgColiveHostel", json=dict(payload))
        return parse_action_response(response, "Failed to publish PG/Hostel")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpDraftGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _request(self, method: str, endpoint: str, *, json: Any = None) -> dict[str, Any]:
        logger.debug("%s %s", method, endpoint)
        try:
            response = await self._client.request(method, endpoint, json=json)
        except httpx.TimeoutException as exc:
            raise DraftTimeoutError(status_code=0, response_text=str(exc), endpoint=endpoint) from exc
        except httpx.HTTPError as exc:
            raise DraftApiError(status_code=0, response_text=str(exc), endpoint=endpoint) from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise DraftApiError(
                status_code=response.status_code,
                response_text=response.text,
                endpoint=endpoint,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise DraftApiError(
                status_code=response.status_code,
                response_text=response.text,
                endpoint=endpoint,
            ) from exc
        if not isinstance(data, dict):
            raise DraftApiError(
                status_code=response.status_code,
                response_text=response.text,
                endpoint=endpoint,
            )
        return data
