"""
express-ts-wizard - Interactive Express + TypeScript project creator

Collects a project name, a TypeScript strictness preset and a Git choice,
then copies templates, installs dependencies and makes the first commit.
"""

__version__ = "0.1.0"

from express_ts_wizard.spec import Strictness, UserChoices, WizardSettings
from express_ts_wizard.generator import CreationResult, WizardError, create_project

__all__ = [
    "Strictness",
    "UserChoices",
    "WizardSettings",
    "CreationResult",
    "WizardError",
    "create_project",
]
