from __future__ import annotations

import pytest

from pgwizard.catalog import PG_CATALOG, StepCatalog, StepDescriptor


def _catalog_with_food_gate() -> StepCatalog:
    return StepCatalog(
        [
            StepDescriptor("review", "Review", 9),
            StepDescriptor("basics", "Basics", 0),
            StepDescriptor("food", "Food", 1, is_visible=lambda data: data.get("foodAvailable") is True),
            StepDescriptor("rules", "Rules", 2),
        ]
    )


def test_pg_catalog_order() -> None:
    assert [step.step_id for step in PG_CATALOG.visible_steps({})] == [
        "basic-details",
        "location-details",
        "room-types",
        "amenities",
        "food-mess",
        "rules-restrictions",
        "media-upload",
        "review-submit",
    ]
    assert PG_CATALOG.total_visible_steps({}) == 8


def test_visible_steps_sorted_by_order_and_filtered() -> None:
    catalog = _catalog_with_food_gate()
    assert [step.step_id for step in catalog.visible_steps({})] == ["basics", "rules", "review"]
    assert [step.step_id for step in catalog.visible_steps({"foodAvailable": True})] == [
        "basics",
        "food",
        "rules",
        "review",
    ]


def test_visible_steps_deterministic() -> None:
    catalog = _catalog_with_food_gate()
    data = {"foodAvailable": True}
    first = catalog.visible_steps(data)
    for _ in range(5):
        assert catalog.visible_steps(data) == first
    assert catalog.step_at(1, data) == catalog.step_at(1, data)


def test_step_at_out_of_range_returns_none() -> None:
    catalog = _catalog_with_food_gate()
    assert catalog.step_at(3, {"foodAvailable": True}).step_id == "review"
    assert catalog.step_at(3, {}) is None
    assert catalog.step_at(-1, {}) is None
    assert catalog.clamp_index(3, {}) == 2
    assert catalog.clamp_index(-4, {}) == 0


def test_lookups() -> None:
    catalog = _catalog_with_food_gate()
    assert catalog.step_name(0, {}) == "Basics"
    assert catalog.step_name(10, {}) == ""
    assert catalog.is_step_visible("food", {}) is False
    assert catalog.is_step_visible("food", {"foodAvailable": True}) is True
    assert catalog.is_step_visible("missing", {}) is False
    assert catalog.step_index_by_id("rules", {}) == 1
    assert catalog.step_index_by_id("food", {}) == -1


def test_duplicate_step_ids_rejected() -> None:
    with pytest.raises(ValueError):
        StepCatalog([StepDescriptor("a", "A", 0), StepDescriptor("a", "Again", 1)])
