"""Draft persistence gateways."""

from pgwizard.drafts.client import DraftGateway, create_gateway
from pgwizard.drafts.memory import InMemoryDraftGateway
from pgwizard.drafts.remote import HttpDraftGateway
from pgwizard.drafts.types import (
    ActionResult,
    CreateDraftResult,
    Draft,
    DraftApiError,
    DraftListResult,
    DraftTimeoutError,
    FetchDraftResult,
)

__all__ = [
    "ActionResult",
    "CreateDraftResult",
    "Draft",
    "DraftApiError",
    "DraftGateway",
    "DraftListResult",
    "DraftTimeoutError",
    "FetchDraftResult",
    "HttpDraftGateway",
    "InMemoryDraftGateway",
    "create_gateway",
]
