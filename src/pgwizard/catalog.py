"""Ordered PG/Hostel step catalog with data-dependent visibility."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

FlattenedData = Mapping[str, Any]
VisibilityPredicate = Callable[[FlattenedData], bool]

CATEGORY_CORE = "core"
CATEGORY_DETAILS = "details"
CATEGORY_MEDIA = "media"
CATEGORY_FINAL = "final"


def always_visible(_data: FlattenedData) -> bool:
    return True


@dataclass(frozen=True)
class StepDescriptor:
    step_id: str
    name: str
    order: int
    category: str = CATEGORY_CORE
    is_visible: VisibilityPredicate = always_visible


class StepCatalog:
    """Static step configuration; every lookup resolves against the visible subset.

    The same flattened data always yields the same ordering, so an index is a
    stable reference for as long as the data it was computed from is unchanged.
    """

    def __init__(self, steps: Sequence[StepDescriptor]) -> None:
        seen: set[str] = set()
        for step in steps:
            if step.step_id in seen:
                raise ValueError(f"Duplicate step id in catalog: {step.step_id}")
            seen.add(step.step_id)
        self._steps = tuple(sorted(steps, key=lambda step: step.order))

    @property
    def steps(self) -> tuple[StepDescriptor, ...]:
        return self._steps

    @property
    def step_ids(self) -> tuple[str, ...]:
        return tuple(step.step_id for step in self._steps)

    def get(self, step_id: str) -> StepDescriptor | None:
        for step in self._steps:
            if step.step_id == step_id:
                return step
        return None

    def visible_steps(self, data: FlattenedData | None = None) -> list[StepDescriptor]:
        flat = data or {}
        return [step for step in self._steps if step.is_visible(flat)]

    def total_visible_steps(self, data: FlattenedData | None = None) -> int:
        return len(self.visible_steps(data))

    def step_at(self, index: int, data: FlattenedData | None = None) -> StepDescriptor | None:
        """Resolve ``index`` within the visible ordering; ``None`` when out of range."""
        visible = self.visible_steps(data)
        if index < 0 or index >= len(visible):
            return None
        return visible[index]

    def step_name(self, index: int, data: FlattenedData | None = None) -> str:
        step = self.step_at(index, data)
        return step.name if step else ""

    def is_step_visible(self, step_id: str, data: FlattenedData | None = None) -> bool:
        step = self.get(step_id)
        return step.is_visible(data or {}) if step else False

    def step_index_by_id(self, step_id: str, data: FlattenedData | None = None) -> int:
        for index, step in enumerate(self.visible_steps(data)):
            if step.step_id == step_id:
                return index
        return -1

    def clamp_index(self, index: int, data: FlattenedData | None = None) -> int:
        total = self.total_visible_steps(data)
        if total == 0:
            return 0
        return max(0, min(index, total - 1))


PG_STEPS: tuple[StepDescriptor, ...] = (
    StepDescriptor("basic-details", "Basic Details", 0, CATEGORY_CORE),
    StepDescriptor("location-details", "Location Details", 1, CATEGORY_CORE),
    StepDescriptor("room-types", "Room Types & Pricing", 2, CATEGORY_CORE),
    StepDescriptor("amenities", "Amenities", 3, CATEGORY_DETAILS),
    StepDescriptor("food-mess", "Food & Mess", 4, CATEGORY_DETAILS),
    StepDescriptor("rules-restrictions", "Rules & Restrictions", 5, CATEGORY_DETAILS),
    StepDescriptor("media-upload", "Media Upload", 6, CATEGORY_MEDIA),
    StepDescriptor("review-submit", "Review & Submit", 7, CATEGORY_FINAL),
)

PG_CATALOG = StepCatalog(PG_STEPS)
