"""Wizard orchestration: navigation, completion tracking and draft sync."""

from __future__ import annotations

import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Mapping, TypeVar

from pgwizard.catalog import PG_CATALOG, StepCatalog, StepDescriptor
from pgwizard.config import DEFAULT_TIMEOUT_S, DRAFT_KIND_PG
from pgwizard.drafts.client import DraftGateway
from pgwizard.drafts.types import Draft, DraftApiError, DraftTimeoutError
from pgwizard.store import FormStateStore, sanitize
from pgwizard.validation import SchemaRegistry, StepsValidationSummary, default_registry
from pgwizard.wizard.state import SaveResult, WizardState

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]
T = TypeVar("T")


def _render_notifier(level: str, message: str) -> None:
    from pgwizard.ui.render import render_notification

    render_notification(level, message)


class WizardController:
    """Owns one wizard session.

    ``completed_steps`` is derived: every change to the form data re-validates
    every visible step from scratch. Only ``reset`` sets it directly, back to
    the empty set of a torn-down session.

    Saves are serialized: a second ``save_and_continue`` or ``save_draft``
    waits for the one in flight to finish, including its local recompute.
    """

    def __init__(
        self,
        gateway: DraftGateway,
        *,
        catalog: StepCatalog = PG_CATALOG,
        registry: SchemaRegistry | None = None,
        draft_id: str | None = None,
        draft_kind: str = DRAFT_KIND_PG,
        timeout_s: float | None = DEFAULT_TIMEOUT_S,
        notifier: Notifier | None = None,
    ) -> None:
        self._gateway = gateway
        self._catalog = catalog
        self._registry = registry or default_registry()
        self._draft_kind = draft_kind
        self._timeout_s = timeout_s
        self._notify = notifier or _render_notifier
        self._store = FormStateStore(catalog.step_ids)
        self._store.subscribe(self._recompute_completed)
        self._initial_draft_id = draft_id
        self._draft_id: str | None = None
        self._current = 0
        self._completed: frozenset[int] = frozenset()
        self._property_type: str | None = None
        self._is_loading_draft = False
        self._is_creating_draft = False
        self._lock = asyncio.Lock()

    # read side

    @property
    def state(self) -> WizardState:
        return WizardState(
            current_step_index=self._current,
            draft_id=self._draft_id,
            form_data=self._store.snapshot(),
            completed_steps=self._completed,
            is_loading_draft=self._is_loading_draft,
            is_creating_draft=self._is_creating_draft,
            property_type=self._property_type,
        )

    @property
    def current_step_index(self) -> int:
        return self._current

    @property
    def draft_id(self) -> str | None:
        return self._draft_id

    @property
    def completed_steps(self) -> frozenset[int]:
        return self._completed

    @property
    def form_data(self) -> dict[str, Any]:
        return self._store.snapshot()

    @property
    def is_loading_draft(self) -> bool:
        return self._is_loading_draft

    @property
    def is_creating_draft(self) -> bool:
        return self._is_creating_draft

    @property
    def property_type(self) -> str | None:
        return self._property_type

    def flattened(self) -> dict[str, Any]:
        flat = self._store.flatten()
        if self._property_type is not None:
            flat["propertyType"] = self._property_type
        return flat

    def visible_steps(self) -> list[StepDescriptor]:
        return self._catalog.visible_steps(self.flattened())

    def total_steps(self) -> int:
        return len(self.visible_steps())

    def current_step(self) -> StepDescriptor | None:
        flat = self.flattened()
        return self._catalog.step_at(self._catalog.clamp_index(self._current, flat), flat)

    def step_index(self, step_id: str) -> int:
        return self._catalog.step_index_by_id(step_id, self.flattened())

    def clamp_current_step(self) -> int:
        self._current = self._catalog.clamp_index(self._current, self.flattened())
        return self._current

    def get_step_data(self, step_id: str) -> dict[str, Any]:
        return self._store.get_step_data(step_id)

    def is_step_completed(self, index: int) -> bool:
        return index in self._completed

    def progress(self) -> int:
        total = self.total_steps()
        if total <= 1:
            return 0
        return math.floor(self._current / (total - 1) * 100 + 0.5)

    def publish_readiness(self) -> StepsValidationSummary:
        return self._registry.validate_all_steps(self.visible_steps(), self._store.data)

    # local mutations

    def update_step_data(self, step_id: str, payload: Mapping[str, Any]) -> None:
        self._store.update_step_data(step_id, payload)

    def update_form_data(self, entries: Mapping[str, Any]) -> None:
        self._store.update_form_data(entries)

    def set_property_type(self, property_type: str | None) -> None:
        self._property_type = property_type
        self._recompute_completed()

    # navigation

    def previous_step(self) -> None:
        if self._current > 0:
            self._current -= 1

    def go_to_step(self, index: int) -> None:
        self._current = index

    def reset(self) -> None:
        self._store.clear()
        self._completed = frozenset()
        self._current = 0
        self._draft_id = None
        self._property_type = None
        self._is_creating_draft = False
        self._is_loading_draft = False

    # persistence

    async def initialize(
        self,
        draft_id: str | None = None,
        *,
        editing_draft: Draft | None = None,
    ) -> bool:
        """Seed the session from a draft and land on the first incomplete step.

        Returns ``False`` when there was nothing to load or the fetch failed;
        the session then stays fresh.
        """
        if editing_draft is not None:
            self._load_draft(editing_draft)
            return True

        target = draft_id or self._initial_draft_id
        if not target:
            return False

        self._is_loading_draft = True
        try:
            result = await self._call(self._gateway.fetch_draft(target), "fetch")
        except DraftApiError as exc:
            logger.warning("Fetching draft %s failed: %s", target, exc)
            self._notify("warning", "Could not load your saved draft. Starting a new listing.")
            return False
        finally:
            self._is_loading_draft = False

        if not result.success or result.draft is None:
            logger.warning("Fetching draft %s was unsuccessful: %s", target, result.message)
            self._notify("warning", result.message or "Could not load your saved draft. Starting a new listing.")
            return False

        self._load_draft(result.draft)
        return True

    async def save_and_continue(self, step_id: str, payload: Mapping[str, Any] | None = None) -> SaveResult:
        async with self._lock:
            before = self._store.snapshot()
            if payload:
                self._store.update_step_data(step_id, payload)

            result = await self._persist(self._store.snapshot())
            if result.draft_id is None:
                self._store.replace(before)
                return result

            if not result.success:
                logger.warning("Draft save unsuccessful; continuing to the next step")
            advanced = False
            total = self.total_steps()
            if self._current < total - 1:
                self._current += 1
                advanced = True
            return SaveResult(
                success=result.success,
                draft_id=result.draft_id,
                message=result.message,
                advanced=advanced,
            )

    async def save_draft(self, snapshot: Mapping[str, Any] | None = None) -> SaveResult:
        async with self._lock:
            data = dict(snapshot) if snapshot is not None else self._store.snapshot()
            return await self._persist(data)

    async def publish(self) -> SaveResult:
        if not self._draft_id:
            self._notify("error", "No draft found. Please save your PG/Hostel details first before publishing.")
            return SaveResult(success=False, message="No draft found")

        summary = self.publish_readiness()
        if not summary.all_valid:
            names = ", ".join(step.name for step in summary.invalid_steps)
            self._notify("error", f"Complete these steps before publishing: {names}")
            return SaveResult(success=False, draft_id=self._draft_id, message=f"Incomplete steps: {names}")

        flat = self.flattened()
        payload = sanitize(
            {
                **self._store.snapshot(),
                "draftId": self._draft_id,
                "pgHostelName": flat.get("pgHostelName") or flat.get("propertyName") or flat.get("title"),
            }
        )
        try:
            result = await self._call(self._gateway.publish_listing(payload), "publish")
        except DraftApiError as exc:
            logger.warning("Publishing draft %s failed: %s", self._draft_id, exc)
            self._notify("error", "Publishing failed. Please try again.")
            return SaveResult(success=False, draft_id=self._draft_id, message=str(exc))
        if not result.success:
            self._notify("error", result.message or "Publishing failed. Please try again.")
            return SaveResult(success=False, draft_id=self._draft_id, message=result.message)
        self._notify("success", "PG/Hostel publishing started.")
        return SaveResult(success=True, draft_id=self._draft_id, message=result.message)

    # internals

    def _recompute_completed(self) -> None:
        self._completed = self._registry.completed_indices(self.visible_steps(), self._store.data)

    def _load_draft(self, draft: Draft) -> None:
        data = dict(draft.draft_data or {})
        property_type = data.get("propertyType")
        self._property_type = property_type if isinstance(property_type, str) else None
        self._draft_id = draft.draft_id
        self._store.replace(data)
        self._current = self._first_incomplete_index()
        logger.debug("Loaded draft %s; resuming at step %d", draft.draft_id, self._current)

    def _first_incomplete_index(self) -> int:
        for index in range(self.total_steps()):
            if index not in self._completed:
                return index
        return 0

    async def _persist(self, snapshot: Mapping[str, Any]) -> SaveResult:
        draft_id = self._draft_id
        if draft_id is None:
            draft_id = await self._create_draft()
            if draft_id is None:
                return SaveResult(success=False, message="Failed to create draft")

        try:
            response = await self._call(self._gateway.update_draft(draft_id, sanitize(snapshot)), "update")
        except DraftApiError as exc:
            logger.warning("Updating draft %s failed: %s", draft_id, exc)
            self._notify("warning", "Your progress could not be saved right now. You can keep going.")
            return SaveResult(success=False, draft_id=draft_id, message=str(exc))

        if not response.success:
            logger.warning("Updating draft %s was unsuccessful: %s", draft_id, response.message)
            self._notify("warning", "Your progress could not be saved right now. You can keep going.")
            return SaveResult(success=False, draft_id=draft_id, message=response.message or "Unknown error")
        logger.debug("Draft %s saved", draft_id)
        return SaveResult(success=True, draft_id=draft_id, message=response.message)

    async def _create_draft(self) -> str | None:
        self._is_creating_draft = True
        try:
            result = await self._call(self._gateway.create_draft(self._draft_kind), "create")
        except DraftApiError as exc:
            logger.warning("Creating draft failed: %s", exc)
            self._notify("error", "Could not create a draft. Please try again.")
            return None
        finally:
            self._is_creating_draft = False

        if not result.success or not result.draft_id:
            logger.warning("Creating draft was unsuccessful: %s", result.message)
            self._notify("error", result.message or "Could not create a draft. Please try again.")
            return None
        self._draft_id = result.draft_id
        logger.debug("Created draft %s", result.draft_id)
        return result.draft_id

    async def _call(self, call: Awaitable[T], operation: str) -> T:
        if self._timeout_s is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_s)
        except asyncio.TimeoutError as exc:
            raise DraftTimeoutError(
                status_code=0,
                response_text=f"{operation} timed out after {self._timeout_s}s",
                endpoint=operation,
            ) from exc
