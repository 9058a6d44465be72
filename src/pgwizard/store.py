"""Accumulated multi-step form data and its derived views."""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Callable, Iterable, Mapping

logger = logging.getLogger(__name__)

FormData = dict[str, Any]
ChangeListener = Callable[[], None]


def flatten_form_data(form_data: Mapping[str, Any], step_ids: Iterable[str] = ()) -> dict[str, Any]:
    """Merge step payloads into one mapping; the first writer of a key wins.

    Known steps are merged in catalog order, then the remaining top-level keys
    in insertion order. Without a catalog every mapping value is treated as a
    step payload. Anything else passes through under its own key.
    """
    catalog_ids = tuple(step_ids)
    ordered_steps = [step_id for step_id in catalog_ids if step_id in form_data]
    known = set(ordered_steps)
    treat_all_mappings_as_steps = not catalog_ids
    flat: dict[str, Any] = {}

    for step_id in ordered_steps:
        _merge_into(flat, step_id, form_data[step_id], merge_mapping=True)
    for key, value in form_data.items():
        if key in known:
            continue
        _merge_into(flat, key, value, merge_mapping=treat_all_mappings_as_steps)
    return flat


def _merge_into(flat: dict[str, Any], key: str, value: Any, *, merge_mapping: bool) -> None:
    if merge_mapping and isinstance(value, Mapping):
        for field_name, field_value in value.items():
            flat.setdefault(field_name, field_value)
    else:
        flat.setdefault(key, value)


def sanitize(obj: Any) -> Any:
    """Return a JSON-safe deep copy of ``obj``.

    Falls back to a field-by-field filter when the whole object does not
    serialize; values that cannot be represented are dropped.
    """
    if not isinstance(obj, (Mapping, list, tuple)):
        return obj
    try:
        return json.loads(json.dumps(obj, allow_nan=False))
    except (TypeError, ValueError) as exc:
        logger.warning("Snapshot is not fully serializable (%s); filtering field by field", exc)
    return _filter_serializable(obj, frozenset())


_DROP = object()


def _filter_serializable(value: Any, ancestors: frozenset[int]) -> Any:
    """Drop unserializable leaves; ``ancestors`` holds the ids of the containers above ``value``."""
    if isinstance(value, (Mapping, list, tuple)):
        if id(value) in ancestors:
            return _DROP
        ancestors = ancestors | {id(value)}
    if isinstance(value, Mapping):
        filtered: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                continue
            cleaned = _filter_serializable(item, ancestors)
            if cleaned is not _DROP:
                filtered[key] = cleaned
        return filtered
    if isinstance(value, (list, tuple)):
        cleaned_items = (_filter_serializable(item, ancestors) for item in value)
        return [cleaned for cleaned in cleaned_items if cleaned is not _DROP]
    if callable(value):
        return _DROP
    try:
        return json.loads(json.dumps(value, allow_nan=False))
    except (TypeError, ValueError):
        return _DROP


class FormStateStore:
    """Holds ``step id -> payload`` plus any legacy top-level keys.

    Every mutation invalidates the cached flattened view and notifies the
    subscribed listeners.
    """

    def __init__(self, step_ids: Iterable[str] = (), initial: Mapping[str, Any] | None = None) -> None:
        self._step_ids = tuple(step_ids)
        self._data: FormData = copy.deepcopy(dict(initial)) if initial else {}
        self._flat_cache: dict[str, Any] | None = None
        self._listeners: list[ChangeListener] = []
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def get_step_data(self, step_id: str) -> dict[str, Any]:
        value = self._data.get(step_id)
        return dict(value) if isinstance(value, Mapping) else {}

    def update_step_data(self, step_id: str, partial: Mapping[str, Any]) -> None:
        bucket = self.get_step_data(step_id)
        bucket.update(copy.deepcopy(dict(partial)))
        self._data[step_id] = bucket
        self._changed()

    def update_form_data(self, entries: Mapping[str, Any]) -> None:
        """Shallow top-level merge, used for legacy flat keys."""
        self._data.update(copy.deepcopy(dict(entries)))
        self._changed()

    def replace(self, data: Mapping[str, Any]) -> None:
        self._data = copy.deepcopy(dict(data))
        self._changed()

    def clear(self) -> None:
        self._data = {}
        self._changed()

    def snapshot(self) -> FormData:
        return copy.deepcopy(self._data)

    def flatten(self) -> dict[str, Any]:
        if self._flat_cache is None:
            self._flat_cache = flatten_form_data(self._data, self._step_ids)
        return dict(self._flat_cache)

    def _changed(self) -> None:
        self._flat_cache = None
        self._version += 1
        for listener in self._listeners:
            listener()
