"""
Wizard Spec Models - Pydantic models for user choices and settings

Defines what the wizard collects from the user and how it is configured.
Pydantic handles validation, defaults, and serialization.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


PROJECT_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"
DEFAULT_PROJECT_NAME = "my-express-app"

CONFIG_ENV_VAR = "EXPRESS_TS_WIZARD_CONFIG"
LOG_LEVEL_ENV_VAR = "EXPRESS_TS_WIZARD_LOG_LEVEL"
PACKAGE_MANAGER_ENV_VAR = "EXPRESS_TS_WIZARD_PACKAGE_MANAGER"


# ═══════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════


class Strictness(str, Enum):
    """TypeScript strictness presets for the generated tsconfig"""

    RELAXED = "relaxed"
    MODERATE = "moderate"
    STRICT = "strict"


# Template paths are relative to the templates directory
TEMPLATE_SET: dict[Strictness, str] = {
    Strictness.RELAXED: "tsconfig/relaxed.json",
    Strictness.MODERATE: "tsconfig/moderate.json",
    Strictness.STRICT: "tsconfig/strict.json",
}

STRICTNESS_DESCRIPTIONS: dict[Strictness, str] = {
    Strictness.RELAXED: "Relaxed (strict: false)",
    Strictness.MODERATE: "Moderate (strict: true)",
    Strictness.STRICT: "Strict (maximum options)",
}

STRICTNESS_HINTS: dict[Strictness, str] = {
    Strictness.RELAXED: "strict: false - Minimal configuration",
    Strictness.MODERATE: "strict: true - Recommended",
    Strictness.STRICT: "strict + additional options - Maximum type safety",
}


def tsconfig_template(strictness: Strictness | str) -> str:
    """Map a strictness level to its tsconfig template path"""
    return TEMPLATE_SET[Strictness(strictness)]


def describe_strictness(strictness: Strictness | str) -> str:
    """Human-readable description of a strictness level"""
    return STRICTNESS_DESCRIPTIONS[Strictness(strictness)]


def project_name_error(value: str | None) -> str | None:
    """Return a validation message for a project name, or None if it is valid."""
    if not value:
        return "Project name is required"
    if not re.match(PROJECT_NAME_PATTERN, value):
        return "Only letters, numbers, hyphens and underscores allowed"
    return None


# ═══════════════════════════════════════════════════════════════════════════
# USER CHOICES
# ═══════════════════════════════════════════════════════════════════════════


class UserChoices(BaseModel):
    """Answers collected by the wizard. Immutable once created."""

    project_name: str = Field(..., alias="projectName")
    strictness: Strictness = Strictness.MODERATE
    init_git: bool = Field(True, alias="initGit")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("project_name")
    @classmethod
    def validate_project_name(cls, v: str) -> str:
        error = project_name_error(v)
        if error:
            raise ValueError(error)
        return v


# ═══════════════════════════════════════════════════════════════════════════
# SETTINGS
# ═══════════════════════════════════════════════════════════════════════════


class WizardSettings(BaseModel):
    """Tool configuration, loaded from an optional YAML file and the environment"""

    package_manager: str = Field("npm", alias="packageManager")
    install_args: list[str] = Field(default_factory=lambda: ["install"], alias="installArgs")
    lock_file: str = Field("package-lock.json", alias="lockFile")
    commit_message: str = Field(
        "Initial commit from express-ts-wizard", alias="commitMessage"
    )
    templates_dir: Path | None = Field(None, alias="templatesDir")
    log_level: str = Field("WARNING", alias="logLevel")

    model_config = {"populate_by_name": True}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "WizardSettings":
        """Parse YAML content into WizardSettings"""
        import yaml

        data = yaml.safe_load(yaml_content) or {}
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "WizardSettings":
        """Load settings from YAML file"""
        content = Path(path).read_text()
        return cls.from_yaml(content)

    @classmethod
    def load(cls, environ: dict[str, str] | None = None) -> "WizardSettings":
        """
        Build settings from the environment.

        A YAML file named by EXPRESS_TS_WIZARD_CONFIG is read first, then
        EXPRESS_TS_WIZARD_LOG_LEVEL and EXPRESS_TS_WIZARD_PACKAGE_MANAGER
        override the matching fields.
        """
        env = os.environ if environ is None else environ

        config_path = env.get(CONFIG_ENV_VAR)
        settings = cls.from_file(config_path) if config_path else cls()

        overrides: dict[str, Any] = {}
        if env.get(LOG_LEVEL_ENV_VAR):
            overrides["log_level"] = env[LOG_LEVEL_ENV_VAR]
        if env.get(PACKAGE_MANAGER_ENV_VAR):
            overrides["package_manager"] = env[PACKAGE_MANAGER_ENV_VAR]

        if not overrides:
            return settings
        return cls.model_validate({**settings.model_dump(), **overrides})
