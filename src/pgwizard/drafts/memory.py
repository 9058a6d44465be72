"""In-process draft gateway for offline runs and tests."""

from __future__ import annotations

import asyncio
import copy
from typing import Any, Mapping

from pgwizard.drafts.types import (
    ActionResult,
    CreateDraftResult,
    Draft,
    DraftListResult,
    FetchDraftResult,
)


class InMemoryDraftGateway:
    """Stores drafts in a dict; failure flags can be flipped between calls."""

    def __init__(
        self,
        *,
        latency_s: float = 0.0,
        fail_create: bool = False,
        fail_update: bool = False,
        fail_fetch: bool = False,
        fail_publish: bool = False,
    ) -> None:
        self.latency_s = latency_s
        self.fail_create = fail_create
        self.fail_update = fail_update
        self.fail_fetch = fail_fetch
        self.fail_publish = fail_publish
        self.calls: list[tuple[str, str | None]] = []
        self.updates: list[tuple[str, dict[str, Any]]] = []
        self.published: list[dict[str, Any]] = []
        self._drafts: dict[str, dict[str, Any]] = {}
        self._counter = 0

    def seed(self, draft_id: str, draft_data: Mapping[str, Any], kind: str = "PG") -> None:
        self._drafts[draft_id] = {"kind": kind, "draftData": copy.deepcopy(dict(draft_data))}

    def stored(self, draft_id: str) -> dict[str, Any] | None:
        record = self._drafts.get(draft_id)
        return copy.deepcopy(record["draftData"]) if record else None

    async def create_draft(self, kind: str) -> CreateDraftResult:
        await self._pause("create", None)
        if self.fail_create:
            return CreateDraftResult(success=False, message="Failed to create draft")
        self._counter += 1
        draft_id = f"draft-{self._counter:04d}"
        self._drafts[draft_id] = {"kind": kind, "draftData": {}}
        return CreateDraftResult(success=True, draft_id=draft_id)

    async def update_draft(self, draft_id: str, snapshot: Mapping[str, Any]) -> ActionResult:
        await self._pause("update", draft_id)
        if self.fail_update:
            return ActionResult(success=False, message="Failed to update draft")
        record = self._drafts.get(draft_id)
        if record is None:
            return ActionResult(success=False, message=f"Draft not found: {draft_id}")
        record["draftData"] = copy.deepcopy(dict(snapshot))
        self.updates.append((draft_id, copy.deepcopy(dict(snapshot))))
        return ActionResult(success=True, message="Draft updated")

    async def fetch_draft(self, draft_id: str) -> FetchDraftResult:
        await self._pause("fetch", draft_id)
        if self.fail_fetch:
            return FetchDraftResult(success=False, message="Failed to fetch draft")
        record = self._drafts.get(draft_id)
        if record is None:
            return FetchDraftResult(success=False, message=f"Draft not found: {draft_id}")
        return FetchDraftResult(
            success=True,
            draft=Draft(draft_id=draft_id, draft_data=copy.deepcopy(record["draftData"])),
        )

    async def list_drafts(self) -> DraftListResult:
        await self._pause("list", None)
        drafts = [
            {"draftId": draft_id, "kind": record["kind"], "draftData": copy.deepcopy(record["draftData"])}
            for draft_id, record in self._drafts.items()
        ]
        return DraftListResult(success=True, drafts=drafts)

    async def delete_draft(self, draft_id: str) -> ActionResult:
        await self._pause("delete", draft_id)
        if self._drafts.pop(draft_id, None) is None:
            return ActionResult(success=False, message=f"Draft not found: {draft_id}")
        return ActionResult(success=True, message="Draft deleted")

    async def publish_listing(self, payload: Mapping[str, Any]) -> ActionResult:
        await self._pause("publish", payload.get("draftId"))
        if self.fail_publish:
            return ActionResult(success=False, message="Failed to publish PG/Hostel")
        self.published.append(copy.deepcopy(dict(payload)))
        return ActionResult(success=True, message="Your listing is being processed.")

    async def aclose(self) -> None:
        return None

    async def _pause(self, operation: str, draft_id: str | None) -> None:
        self.calls.append((operation, draft_id))
        if self.latency_s > 0:
            await asyncio.sleep(self.latency_s)
