"""Payload models for each PG/Hostel listing step.

Wire keys are camelCase. Unknown keys are allowed on every model because
legacy top-level values are merged into a step's validation input.

Scalars are strict: numbers and booleans are never parsed out of strings.
An optional field may be left out but not sent as null, unless the model
lists it in ``nullable_fields``.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

NonEmpty = Annotated[str, Field(min_length=1)]
Rating = Annotated[StrictFloat, Field(ge=1, le=5)]
Year = Annotated[str, Field(pattern=r"^\d{4}$")]
ClockTime = Annotated[str, Field(pattern=r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")]


class StepModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _no_explicit_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError("Field may be omitted but not null")
        return value


# basic-details


class BasicDetailsPg(StepModel):
    property_name: Annotated[str, Field(min_length=3, max_length=100)] | None = None
    gender_allowed: Literal["Gents", "Ladies", "Gents / Ladies / Unisex"]
    description: Annotated[str, Field(min_length=50, max_length=2000)]
    is_brand_managed: StrictBool = False
    managed_by_brand: StrictBool = False
    brand_name: Annotated[str, Field(min_length=2, max_length=100)] | Literal[""] | None = None
    year_built: Year | Literal[""] | None = None
    last_renovated: Year | Literal[""] | None = None

    @model_validator(mode="after")
    def _brand_name_when_managed(self) -> "BasicDetailsPg":
        if (self.is_brand_managed or self.managed_by_brand) and not self.brand_name:
            raise ValueError("Brand name is required when property is brand managed")
        return self


# location-details


class Coordinates(StepModel):
    lat: StrictFloat = Field(ge=-90, le=90)
    lng: StrictFloat = Field(ge=-180, le=180)


class NearbyLandmark(StepModel):
    id: str
    name: Annotated[str, Field(min_length=1, max_length=100)]


class LocationDetailsPg(StepModel):
    coordinates: Coordinates
    city: NonEmpty
    locality: NonEmpty
    address_text: NonEmpty
    landmark: str | None = None
    show_map_exact: StrictBool = False
    pincode: Annotated[str, Field(pattern=r"^\d{6}$")] | None = None
    zone: Literal[
        "north",
        "south",
        "east",
        "west",
        "central",
        "north_east",
        "north_west",
        "south_east",
        "south_west",
        "suburban",
        "other",
    ] | None = None
    nearby_landmarks: list[NearbyLandmark] = Field(default_factory=list, max_length=5)


# room-types


class PricingItem(StepModel):
    type: NonEmpty
    amount: StrictFloat = Field(ge=0)
    currency: str = "INR"
    mandatory: StrictBool = True
    refundable: StrictBool | None = None
    frequency: Literal["monthly", "one_time", "per_unit"] | None = None
    note: str | None = None


class NamedAmenity(StepModel):
    icon: Any = None
    name: NonEmpty
    available: StrictBool = True


class BedAvailability(StepModel):
    total_beds: StrictFloat = Field(ge=0)
    available_beds: StrictFloat = Field(ge=0)
    sold_out: StrictBool = False
    next_availability: str = "Immediate"


class RoomType(StepModel):
    id: str | StrictInt | StrictFloat | None = None
    name: Annotated[str, Field(min_length=3)]
    category: Literal[
        "Single sharing",
        "Double sharing",
        "Triple sharing",
        "Four sharing",
        "Six sharing",
        "Private room",
        "Studio",
    ]
    room_size: Annotated[str, Field(min_length=1)] | Annotated[StrictFloat, Field(ge=1)]
    refund_policy: str | None = None
    pricing: list[PricingItem] = Field(min_length=1)
    availability: BedAvailability = Field(
        default_factory=lambda: BedAvailability(total_beds=0, available_beds=0)
    )
    amenities: list[NamedAmenity] = Field(default_factory=list)

    @field_validator("room_size")
    @classmethod
    def _room_size_number(cls, value: str | float) -> str | float:
        if isinstance(value, str):
            match = re.search(r"\d+", value)
            return int(match.group()) if match else value
        return value

    @field_validator("refund_policy")
    @classmethod
    def _refund_policy_length(cls, value: str | None) -> str | None:
        if value and len(value) < 5:
            raise ValueError("Refund policy must be at least 5 characters if provided")
        return value

    @model_validator(mode="after")
    def _beds_within_total(self) -> "RoomType":
        if self.availability.available_beds > self.availability.total_beds:
            raise ValueError("Available beds/rooms cannot exceed total beds/rooms")
        return self


class RoomTypesStep(StepModel):
    room_types: list[RoomType] = Field(min_length=1)

    @field_validator("room_types")
    @classmethod
    def _unique_names(cls, rooms: list[RoomType]) -> list[RoomType]:
        names = [room.name.strip().lower() for room in rooms]
        if len(set(names)) != len(names):
            raise ValueError("Room type names must be unique")
        return rooms


# amenities


class AmenitiesPg(StepModel):
    common_amenities: list[NamedAmenity] = Field(default_factory=list)
    common_amenities_legacy: list[str] = Field(default_factory=list)
    room_amenities: list[str] = Field(default_factory=list)


class AmenitiesStep(StepModel):
    amenities: AmenitiesPg


# food-mess


class MealItems(StepModel):
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"non_veg"})

    veg: list[str] = Field(default_factory=list)
    non_veg: list[str] | None = None


class DailyMenu(StepModel):
    day: NonEmpty
    breakfast: MealItems | None = None
    lunch: MealItems | None = None
    dinner: MealItems | None = None


class MealTimings(StepModel):
    breakfast: str = ""
    lunch: str = ""
    dinner: str = ""


class FoodMess(StepModel):
    available: StrictBool = False
    meals: list[Literal["Breakfast", "Lunch", "Dinner"]] = Field(default_factory=list)
    food_type: Literal["Veg", "Non-veg", "Veg & Non-veg"] = "Veg & Non-veg"
    cooking_allowed: StrictBool = False
    tiffin_service: StrictBool = False
    ro_water: StrictBool = False
    rating: Rating = 4.0
    timings: MealTimings = Field(default_factory=MealTimings)
    weekly_menu: list[DailyMenu] = Field(default_factory=list)


class FoodMessPg(StepModel):
    food_mess: FoodMess = Field(default_factory=FoodMess)
    available: StrictBool = False
    meals: list[str] = Field(default_factory=list)
    meals_available: list[Literal["breakfast", "lunch", "dinner"]] = Field(default_factory=list)
    food_type: str = "veg"
    weekly_menu: list[DailyMenu] = Field(default_factory=list)
    weekly_menu_text: str | None = None
    is_cooking_allowed: StrictBool = False
    has_tiffin_service: StrictBool = False
    tiffin_service_name: str | None = None
    has_ro_water: StrictBool = False
    rating: Rating | None = None
    food_quality_rating: Rating | None = None

    @model_validator(mode="after")
    def _meals_when_available(self) -> "FoodMessPg":
        if self.food_mess.available or self.available:
            if not (self.food_mess.meals or self.meals or self.meals_available):
                raise ValueError("At least one meal type must be selected when food service is available")
        return self


# rules-restrictions


class RuleItem(StepModel):
    key: Annotated[str, Field(min_length=1, max_length=100)]
    value: Annotated[str, Field(min_length=1, max_length=200)]


class RulesPg(StepModel):
    rules: list[RuleItem] = Field(min_length=1, max_length=20)
    gate_closing_time: ClockTime | Literal[""] | None = None
    visitor_policy: Literal["allowed", "allowed_with_permission", "not_allowed"] | None = None
    visitor_timings: Annotated[str, Field(max_length=100)] | None = None
    is_alcohol_allowed: StrictBool = False
    is_smoking_allowed: StrictBool = False
    smoking_area: Literal["anywhere", "designated_area", "not_allowed"] | None = None
    is_non_veg_allowed: StrictBool = False
    are_pets_allowed: StrictBool = False
    noise_policy: str | None = None
    quiet_hours_start: ClockTime | Literal[""] | None = None
    quiet_hours_end: ClockTime | Literal[""] | None = None
    minimum_stay_period: Annotated[str, Field(pattern=r"^\d+$")] | None = None
    notice_period: Annotated[str, Field(pattern=r"^\d+$")] | None = None
    additional_rules: Annotated[str, Field(max_length=500)] | None = None

    @field_validator("minimum_stay_period")
    @classmethod
    def _minimum_stay_range(cls, value: str | None) -> str | None:
        if value is not None and not 1 <= int(value) <= 24:
            raise ValueError("Minimum stay must be between 1 and 24 months")
        return value

    @field_validator("notice_period")
    @classmethod
    def _notice_period_range(cls, value: str | None) -> str | None:
        if value is not None and not 0 <= int(value) <= 90:
            raise ValueError("Notice period must be between 0 and 90 days")
        return value


class RulesStep(StepModel):
    rules: RulesPg


# media-upload


class MediaImage(StepModel):
    id: str | None = None
    url: AnyUrl
    filename: str | None = None
    category: Literal[
        "exterior",
        "lobby",
        "rooms",
        "common_areas",
        "kitchen_dining",
        "washrooms",
        "amenities",
        "surroundings",
    ]
    caption: Annotated[str, Field(max_length=200)] | None = None
    alt_text: Annotated[str, Field(max_length=150)] | None = None
    tags: list[str] = Field(default_factory=list)
    is_primary: StrictBool = False
    is_public: StrictBool = True
    sort_order: StrictFloat = Field(default=0, ge=0)


class MediaVideo(StepModel):
    id: str | None = None
    url: AnyUrl
    type: Literal[
        "property_tour",
        "room_showcase",
        "amenities_tour",
        "food_mess_tour",
        "locality_tour",
        "testimonials",
    ]
    platform: Literal["youtube", "vimeo", "direct_upload", "other"] = "other"
    title: Annotated[str, Field(max_length=100)] | None = None
    description: Annotated[str, Field(max_length=500)] | None = None
    duration: StrictFloat | None = Field(default=None, ge=1)


class VirtualTour(StepModel):
    url: AnyUrl
    platform: Literal["matterport", "google_tour", "panoskin", "custom"] = "custom"
    title: Annotated[str, Field(max_length=100)] | None = None
    access_type: Literal["public", "private", "password_protected"] = "public"


class MediaLibrary(StepModel):
    images: list[MediaImage] = Field(min_length=3, max_length=50)
    videos: list[MediaVideo] = Field(default_factory=list, max_length=20)
    virtual_tours: list[VirtualTour] = Field(default_factory=list, max_length=3)


Caption = Annotated[str, Field(max_length=200)]


# flat image and video lists written before the media library existed


class LegacyImage(StepModel):
    url: AnyUrl
    caption: Caption | None = None


class LegacyPropertyImage(LegacyImage):
    type: Literal["cover", "gallery"]


class LegacyRoomImage(LegacyImage):
    room_type: str


class LegacyVideo(LegacyImage):
    type: Literal["property_tour", "room", "common_area", "food_area"]


class MediaUploadPg(StepModel):
    media: MediaLibrary | None = None
    property_images: list[LegacyPropertyImage] = Field(default_factory=list)
    room_images: list[LegacyRoomImage] = Field(default_factory=list)
    washroom_images: list[LegacyImage] = Field(default_factory=list)
    amenities_images: list[LegacyImage] = Field(default_factory=list)
    videos: list[LegacyVideo] = Field(default_factory=list)
    virtual_tour_url: AnyUrl | Literal[""] | None = None


# availability


class PropertyAvailability(StepModel):
    total_beds: StrictFloat = Field(ge=1, le=500)
    available_beds: StrictFloat = Field(ge=0)
    occupancy_rate: StrictFloat = Field(default=0, ge=0, le=100)
    waitlist_count: StrictFloat = Field(default=0, ge=0)


class RoomAvailability(StepModel):
    room_type_id: StrictInt | StrictFloat | str
    total_beds: StrictFloat = Field(ge=1, le=50)
    available_beds: StrictFloat = Field(ge=0)
    sold_out: StrictBool = False
    waitlist_count: StrictFloat = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _beds_within_total(self) -> "RoomAvailability":
        if self.available_beds > self.total_beds:
            raise ValueError("Available beds cannot exceed total beds")
        return self


class AvailabilityPg(StepModel):
    status: Literal[
        "Available",
        "Partially Available",
        "Fully Booked",
        "Under Maintenance",
        "Coming Soon",
    ] = "Available"
    possession: NonEmpty = "Immediate"
    custom_possession_date: str | None = None
    property_availability: PropertyAvailability
    room_availability: list[RoomAvailability] = Field(default_factory=list)


STEP_SCHEMAS: dict[str, type[BaseModel]] = {
    "basic-details": BasicDetailsPg,
    "location-details": LocationDetailsPg,
    "room-types": RoomTypesStep,
    "amenities": AmenitiesStep,
    "food-mess": FoodMessPg,
    "rules-restrictions": RulesStep,
    "media-upload": MediaUploadPg,
    "availability": AvailabilityPg,
}
