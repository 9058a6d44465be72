"""Result and error types shared by draft gateways."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Draft:
    draft_id: str
    draft_data: dict[str, Any]


@dataclass(frozen=True)
class CreateDraftResult:
    success: bool
    draft_id: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class FetchDraftResult:
    success: bool
    draft: Draft | None = None
    message: str | None = None


@dataclass(frozen=True)
class ActionResult:
    success: bool
    message: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DraftListResult:
    success: bool
    drafts: list[dict[str, Any]] = field(default_factory=list)
    message: str | None = None


@dataclass
class DraftApiError(RuntimeError):
    status_code: int
    response_text: str
    endpoint: str

    def __str__(self) -> str:
        return f"DraftApiError(status={self.status_code}, endpoint={self.endpoint})"


@dataclass
class DraftTimeoutError(DraftApiError):
    def __str__(self) -> str:
        return f"DraftTimeoutError(endpoint={self.endpoint})"
