"""Read-only projection of a wizard session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class WizardState:
    current_step_index: int = 0
    draft_id: str | None = None
    form_data: dict[str, Any] = field(default_factory=dict)
    completed_steps: frozenset[int] = frozenset()
    is_loading_draft: bool = False
    is_creating_draft: bool = False
    property_type: str | None = None


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a save; ``success`` reflects persistence, ``advanced`` navigation."""

    success: bool
    draft_id: str | None = None
    message: str | None = None
    advanced: bool = False
