"""Draft gateway interface and response parsing shared by implementations."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from pgwizard.drafts.types import (
    ActionResult,
    CreateDraftResult,
    Draft,
    DraftListResult,
    FetchDraftResult,
)


@runtime_checkable
class DraftGateway(Protocol):
    async def create_draft(self, kind: str) -> CreateDraftResult:
        """Create an empty draft of ``kind`` and return its id."""

    async def update_draft(self, draft_id: str, snapshot: Mapping[str, Any]) -> ActionResult:
        """Replace the stored snapshot; resending the same snapshot is safe."""

    async def fetch_draft(self, draft_id: str) -> FetchDraftResult:
        """Load a stored draft by id."""

    async def list_drafts(self) -> DraftListResult:
        """Return the caller's drafts."""

    async def delete_draft(self, draft_id: str) -> ActionResult:
        """Remove a draft."""

    async def publish_listing(self, payload: Mapping[str, Any]) -> ActionResult:
        """Submit a completed listing for publication."""

    async def aclose(self) -> None:
        """Release any underlying client resources."""


def create_gateway(mode: str, **kwargs: Any) -> DraftGateway:
    if mode == "memory":
        from pgwizard.drafts.memory import InMemoryDraftGateway

        return InMemoryDraftGateway(**kwargs)
    if mode == "http":
        from pgwizard.drafts.remote import HttpDraftGateway

        return HttpDraftGateway(**kwargs)
    raise ValueError(f"Unsupported draft gateway mode: {mode}")


def parse_create_response(payload: Mapping[str, Any]) -> CreateDraftResult:
    data = payload.get("data") or {}
    draft_id = None
    if isinstance(data, Mapping):
        draft_id = data.get("draftId") or data.get("_id") or data.get("id")
    if not payload.get("success") or not draft_id:
        return CreateDraftResult(success=False, message=_message(payload, "Failed to create draft"))
    return CreateDraftResult(success=True, draft_id=str(draft_id), message=_message(payload, None))


def parse_fetch_response(payload: Mapping[str, Any], draft_id: str) -> FetchDraftResult:
    data = payload.get("data")
    if not payload.get("success") or not isinstance(data, Mapping):
        return FetchDraftResult(success=False, message=_message(payload, "Failed to fetch draft"))
    draft_data = data.get("draftData") or {}
    if not isinstance(draft_data, Mapping):
        return FetchDraftResult(success=False, message="Draft data is not an object")
    resolved_id = data.get("draftId") or data.get("_id") or data.get("id") or draft_id
    return FetchDraftResult(success=True, draft=Draft(draft_id=str(resolved_id), draft_data=dict(draft_data)))


def parse_action_response(payload: Mapping[str, Any], default_error: str) -> ActionResult:
    data = payload.get("data")
    data = dict(data) if isinstance(data, Mapping) else {}
    if not payload.get("success"):
        return ActionResult(success=False, message=_message(payload, default_error), data=data)
    return ActionResult(success=True, message=_message(payload, None), data=data)


def parse_list_response(payload: Mapping[str, Any]) -> DraftListResult:
    data = payload.get("data")
    if isinstance(data, Mapping):
        data = data.get("drafts")
    if not payload.get("success") or not isinstance(data, list):
        return DraftListResult(success=False, message=_message(payload, "Failed to fetch drafts"))
    return DraftListResult(success=True, drafts=[dict(item) for item in data if isinstance(item, Mapping)])


def _message(payload: Mapping[str, Any], default: str | None) -> str | None:
    message = payload.get("message")
    return str(message) if message else default
