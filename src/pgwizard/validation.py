"""Per-step validation registry.

A step without a registered validator is vacuously valid. Validation input for
a step is its own nested payload, topped up with legacy top-level values that
are not themselves mappings; step-local keys win on collision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

from pydantic import BaseModel, ValidationError

from pgwizard.catalog import StepDescriptor
from pgwizard.schemas import STEP_SCHEMAS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)


VALID = ValidationResult(valid=True)


@runtime_checkable
class StepValidator(Protocol):
    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """Check a step's validation input; never raises for bad data."""


class PydanticStepValidator:
    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        try:
            self._model.model_validate(dict(data))
        except ValidationError as exc:
            return ValidationResult(valid=False, errors=[_issue_from_error(error) for error in exc.errors()])
        return VALID


@dataclass(frozen=True)
class InvalidStep:
    step_id: str
    name: str
    index: int
    errors: list[ValidationIssue]


@dataclass(frozen=True)
class StepsValidationSummary:
    all_valid: bool
    invalid_steps: list[InvalidStep]
    results: dict[str, ValidationResult]


def build_validation_input(step_id: str, form_data: Mapping[str, Any]) -> dict[str, Any]:
    step_data = form_data.get(step_id)
    data = dict(step_data) if isinstance(step_data, Mapping) else {}
    for key, value in form_data.items():
        if key == step_id or isinstance(value, Mapping):
            continue
        data.setdefault(key, value)
    return data


class SchemaRegistry:
    def __init__(self, validators: Mapping[str, StepValidator] | None = None) -> None:
        self._validators: dict[str, StepValidator] = dict(validators or {})

    def register(self, step_id: str, validator: StepValidator | type[BaseModel]) -> None:
        if isinstance(validator, type) and issubclass(validator, BaseModel):
            validator = PydanticStepValidator(validator)
        self._validators[step_id] = validator

    def has_validator(self, step_id: str) -> bool:
        return step_id in self._validators

    def validate_step(self, step_id: str, form_data: Mapping[str, Any]) -> ValidationResult:
        validator = self._validators.get(step_id)
        if validator is None:
            logger.debug("No validator registered for step %s; treating as valid", step_id)
            return VALID
        result = validator.validate(build_validation_input(step_id, form_data))
        if result.valid:
            logger.debug("Step %s validation passed", step_id)
        else:
            logger.debug("Step %s validation failed: %s", step_id, [issue.message for issue in result.errors])
        return result

    def is_step_valid(self, step_id: str, form_data: Mapping[str, Any]) -> bool:
        return self.validate_step(step_id, form_data).valid

    def validate_all_steps(
        self,
        visible_steps: Iterable[StepDescriptor],
        form_data: Mapping[str, Any],
    ) -> StepsValidationSummary:
        results: dict[str, ValidationResult] = {}
        invalid: list[InvalidStep] = []
        for index, step in enumerate(visible_steps):
            result = self.validate_step(step.step_id, form_data)
            results[step.step_id] = result
            if not result.valid:
                invalid.append(InvalidStep(step.step_id, step.name, index, result.errors))
        return StepsValidationSummary(all_valid=not invalid, invalid_steps=invalid, results=results)

    def completed_indices(
        self,
        visible_steps: Iterable[StepDescriptor],
        form_data: Mapping[str, Any],
    ) -> frozenset[int]:
        return frozenset(
            index
            for index, step in enumerate(visible_steps)
            if self.is_step_valid(step.step_id, form_data)
        )


def default_registry() -> SchemaRegistry:
    registry = SchemaRegistry()
    for step_id, model in STEP_SCHEMAS.items():
        registry.register(step_id, model)
    return registry


def _issue_from_error(error: Mapping[str, Any]) -> ValidationIssue:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "Invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return ValidationIssue(path=location or "root", message=message)
