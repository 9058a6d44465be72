from __future__ import annotations

from typing import Any

from pgwizard.catalog import PG_CATALOG
from pgwizard.validation import (
    SchemaRegistry,
    ValidationIssue,
    ValidationResult,
    build_validation_input,
    default_registry,
)


class AlwaysInvalid:
    def validate(self, data: Any) -> ValidationResult:
        return ValidationResult(valid=False, errors=[ValidationIssue("root", "nope")])


def test_complete_form_data_validates(complete_form_data: dict[str, Any]) -> None:
    summary = default_registry().validate_all_steps(PG_CATALOG.visible_steps({}), complete_form_data)
    assert summary.all_valid, summary.invalid_steps


def test_unregistered_step_is_vacuously_valid() -> None:
    registry = SchemaRegistry()
    assert registry.validate_step("anything", {}).valid
    assert default_registry().validate_step("review-submit", {}).valid
    assert default_registry().validate_step("review-submit", {"review-submit": {"junk": object()}}).valid


def test_basic_details_rules() -> None:
    registry = default_registry()
    good = {"basic-details": {"genderAllowed": "Ladies", "description": "d" * 50}}
    assert registry.validate_step("basic-details", good).valid

    short = {"basic-details": {"genderAllowed": "Ladies", "description": "too short"}}
    result = registry.validate_step("basic-details", short)
    assert not result.valid
    assert any(issue.path == "description" for issue in result.errors)

    brand = {"basic-details": {**good["basic-details"], "isBrandManaged": True}}
    result = registry.validate_step("basic-details", brand)
    assert not result.valid
    assert any("Brand name is required" in issue.message for issue in result.errors)

    brand["basic-details"]["brandName"] = "Stanza"
    assert registry.validate_step("basic-details", brand).valid


def test_legacy_top_level_values_fill_missing_fields() -> None:
    form_data = {"basic-details": {"genderAllowed": "Gents"}, "description": "x" * 60}
    assert default_registry().validate_step("basic-details", form_data).valid


def test_step_local_value_wins_over_legacy_value() -> None:
    form_data = {
        "basic-details": {"genderAllowed": "Gents", "description": "short"},
        "description": "x" * 60,
    }
    assert not default_registry().validate_step("basic-details", form_data).valid


def test_build_validation_input_skips_other_step_objects() -> None:
    form_data = {
        "stepA": {"a": 1},
        "stepB": {"b": 2},
        "legacyList": [1, 2],
        "legacyNone": None,
        "a": "ignored",
    }
    assert build_validation_input("stepA", form_data) == {"a": 1, "legacyList": [1, 2], "legacyNone": None}
    assert build_validation_input("missing", form_data) == {"legacyList": [1, 2], "legacyNone": None, "a": "ignored"}


def test_room_types_rules(complete_form_data: dict[str, Any]) -> None:
    registry = default_registry()
    room = complete_form_data["room-types"]["roomTypes"][0]

    over_booked = {**room, "availability": {"totalBeds": 2, "availableBeds": 3}}
    assert not registry.validate_step("room-types", {"room-types": {"roomTypes": [over_booked]}}).valid

    duplicate = [room, {**room, "name": " deluxe double "}]
    assert not registry.validate_step("room-types", {"room-types": {"roomTypes": duplicate}}).valid

    no_pricing = {**room, "pricing": []}
    assert not registry.validate_step("room-types", {"room-types": {"roomTypes": [no_pricing]}}).valid
    with_rent = {**no_pricing, "rentPerMonth": 8000}
    result = registry.validate_step("room-types", {"room-types": {"roomTypes": [with_rent]}})
    assert not result.valid
    assert any(issue.path == "roomTypes.0.pricing" for issue in result.errors)

    assert not registry.validate_step("room-types", {"room-types": {"roomTypes": []}}).valid


def test_numbers_and_booleans_are_not_parsed_from_strings(complete_form_data: dict[str, Any]) -> None:
    registry = default_registry()
    room = complete_form_data["room-types"]["roomTypes"][0]

    string_amount = {**room, "pricing": [{"type": "Monthly rent", "amount": "9500"}]}
    assert not registry.validate_step("room-types", {"room-types": {"roomTypes": [string_amount]}}).valid

    string_beds = {**room, "availability": {"totalBeds": "10", "availableBeds": "4"}}
    assert not registry.validate_step("room-types", {"room-types": {"roomTypes": [string_beds]}}).valid

    basic = complete_form_data["basic-details"]
    string_flag = {"basic-details": {**basic, "isBrandManaged": "no"}}
    assert not registry.validate_step("basic-details", string_flag).valid


def test_optional_fields_reject_explicit_null(complete_form_data: dict[str, Any]) -> None:
    registry = default_registry()
    basic = complete_form_data["basic-details"]

    result = registry.validate_step("basic-details", {"basic-details": {**basic, "propertyName": None}})
    assert not result.valid
    assert [issue.path for issue in result.errors] == ["propertyName"]

    without_name = {key: value for key, value in basic.items() if key != "propertyName"}
    assert registry.validate_step("basic-details", {"basic-details": without_name}).valid

    menu = {"day": "Monday", "breakfast": {"veg": ["Poha"], "nonVeg": None}}
    food = {"foodMess": {"available": True, "meals": ["Breakfast"], "weeklyMenu": [menu]}}
    assert registry.validate_step("food-mess", {"food-mess": food}).valid


def test_food_mess_requires_meals_when_available() -> None:
    registry = default_registry()
    assert registry.validate_step("food-mess", {}).valid
    assert not registry.validate_step("food-mess", {"food-mess": {"foodMess": {"available": True}}}).valid
    assert registry.validate_step("food-mess", {"food-mess": {"available": True, "mealsAvailable": ["lunch"]}}).valid


def test_wrapped_step_payloads_required() -> None:
    registry = default_registry()
    assert not registry.validate_step("amenities", {}).valid
    assert registry.validate_step("amenities", {"amenities": {"amenities": {}}}).valid
    assert not registry.validate_step("rules-restrictions", {"rules-restrictions": {"rules": {"rules": []}}}).valid


def test_media_upload_needs_three_images_when_given() -> None:
    registry = default_registry()
    image = {"url": "https://cdn.example.com/front.jpg", "category": "exterior"}
    assert registry.validate_step("media-upload", {}).valid
    assert not registry.validate_step("media-upload", {"media-upload": {"media": {"images": [image]}}}).valid
    assert registry.validate_step("media-upload", {"media-upload": {"media": {"images": [image] * 3}}}).valid


def test_validate_all_steps_reports_invalid_indices() -> None:
    registry = SchemaRegistry()
    registry.register("location-details", AlwaysInvalid())
    summary = registry.validate_all_steps(PG_CATALOG.visible_steps({}), {})
    assert not summary.all_valid
    assert [(step.step_id, step.index) for step in summary.invalid_steps] == [("location-details", 1)]
    assert registry.completed_indices(PG_CATALOG.visible_steps({}), {}) == frozenset({0, 2, 3, 4, 5, 6, 7})


def test_legacy_media_lists_are_checked() -> None:
    registry = default_registry()
    cover = {"url": "https://cdn.example.com/cover.jpg", "type": "cover"}
    assert registry.validate_step("media-upload", {"media-upload": {"propertyImages": [cover]}}).valid

    bad_type = {**cover, "type": "banner"}
    assert not registry.validate_step("media-upload", {"media-upload": {"propertyImages": [bad_type]}}).valid

    room_image = {"url": "not a url", "roomType": "Deluxe Double"}
    assert not registry.validate_step("media-upload", {"media-upload": {"roomImages": [room_image]}}).valid

    video = {"url": "https://videos.example.com/tour.mp4", "type": "food_area", "caption": "c" * 201}
    assert not registry.validate_step("media-upload", {"media-upload": {"videos": [video]}}).valid
