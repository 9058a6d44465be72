"""Resumable, draft-backed step engine for PG/Hostel listing submissions."""

from pgwizard.catalog import PG_CATALOG, StepCatalog, StepDescriptor
from pgwizard.store import FormStateStore, flatten_form_data, sanitize
from pgwizard.validation import SchemaRegistry, ValidationIssue, ValidationResult, default_registry
from pgwizard.wizard import SaveResult, WizardController, WizardState

__all__ = [
    "PG_CATALOG",
    "FormStateStore",
    "SaveResult",
    "SchemaRegistry",
    "StepCatalog",
    "StepDescriptor",
    "ValidationIssue",
    "ValidationResult",
    "WizardController",
    "WizardState",
    "default_registry",
    "flatten_form_data",
    "sanitize",
]
