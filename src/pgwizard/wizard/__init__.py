"""Wizard package."""

from pgwizard.wizard.controller import Notifier, WizardController
from pgwizard.wizard.state import SaveResult, WizardState

__all__ = ["Notifier", "SaveResult", "WizardController", "WizardState"]
