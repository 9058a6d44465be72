from __future__ import annotations

import copy
from typing import Any

import pytest
import pytest_asyncio

from pgwizard.drafts import Draft, InMemoryDraftGateway
from pgwizard.wizard import WizardController

COMPLETE_FORM_DATA: dict[str, Any] = {
    "basic-details": {
        "propertyName": "Test PG",
        "genderAllowed": "Gents",
        "description": "x" * 60,
    },
    "location-details": {
        "coordinates": {"lat": 12.9352, "lng": 77.6245},
        "city": "Bengaluru",
        "locality": "Koramangala",
        "addressText": "12, 5th Cross, Koramangala 4th Block",
        "pincode": "560034",
    },
    "room-types": {
        "roomTypes": [
            {
                "name": "Deluxe Double",
                "category": "Double sharing",
                "roomSize": "120 sq ft",
                "pricing": [{"type": "Monthly rent", "amount": 9500, "frequency": "monthly"}],
                "availability": {"totalBeds": 10, "availableBeds": 4},
            }
        ]
    },
    "amenities": {"amenities": {"commonAmenities": [{"name": "High Speed WiFi"}]}},
    "food-mess": {"foodMess": {"available": True, "meals": ["Breakfast", "Dinner"]}},
    "rules-restrictions": {"rules": {"rules": [{"key": "Gate Closing Time", "value": "11:00 PM"}]}},
    "media-upload": {},
    "review-submit": {},
}


class Notices:
    def __init__(self) -> None:
        self.items: list[tuple[str, str]] = []

    def __call__(self, level: str, message: str) -> None:
        self.items.append((level, message))

    def levels(self) -> list[str]:
        return [level for level, _ in self.items]


@pytest.fixture
def complete_form_data() -> dict[str, Any]:
    return copy.deepcopy(COMPLETE_FORM_DATA)


@pytest.fixture
def gateway() -> InMemoryDraftGateway:
    return InMemoryDraftGateway()


@pytest.fixture
def notices() -> Notices:
    return Notices()


@pytest.fixture
def controller(gateway: InMemoryDraftGateway, notices: Notices) -> WizardController:
    return WizardController(gateway, notifier=notices, timeout_s=2.0)


@pytest_asyncio.fixture
async def resumed_controller(
    controller: WizardController, complete_form_data: dict[str, Any]
) -> WizardController:
    await controller.initialize(editing_draft=Draft("draft-complete", complete_form_data))
    return controller
