"""Equalizer configuration.

Typed defaults for the wizard and the scaffolder.  Settings use Pydantic v2
models so they are validated at construction time and can be serialised to
and from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from equalizer.blueprint.models import SELECTION_CATEGORIES, Selection
from equalizer.blueprint.registry import FRAMEWORK_MAP, PACKAGE_MANAGER_MAP
from equalizer.errors import UnknownFrameworkError, UnknownPackageManagerError

_TRUTHY = {"1", "true", "yes", "on"}


class SelectionDefaults(BaseModel):
    """Options pre-selected in each category of the interactive wizard."""

    styling: list[str] = Field(default_factory=lambda: ["tailwind"])
    data: list[str] = Field(default_factory=lambda: ["axios"])
    state: list[str] = Field(default_factory=lambda: ["redux-toolkit"])
    tooling: list[str] = Field(default_factory=lambda: ["eslint", "prettier", "testing-library"])

    # Only React has a sensible default state library.
    state_frameworks: list[str] = Field(default_factory=lambda: ["react"])

    def for_framework(self, framework: str) -> Selection:
        """Return the defaults that apply to *framework* (unsanitised)."""
        raw = {category: getattr(self, category) for category in SELECTION_CATEGORIES}
        if framework not in self.state_frameworks:
            raw["state"] = []
        return Selection.from_mapping(raw)


class Config(BaseModel):
    """Global Equalizer configuration.

    Instances are created once by the CLI entry point (from defaults, a JSON
    file or the environment) and passed to the prompts and the scaffolder.
    """

    default_project_name: str = Field(default="my-app", min_length=1)
    default_package_manager: str = Field(default="pnpm")
    default_framework: str = Field(default="react")
    default_typescript: bool = Field(default=True)
    default_selections: SelectionDefaults = Field(default_factory=SelectionDefaults)

    working_dir: Path = Field(default=Path("."))
    command_timeout: int = Field(
        default=900, ge=30, description="Per-command timeout in seconds"
    )
    show_banner: bool = Field(default=True)

    @field_validator("default_package_manager")
    @classmethod
    def _known_manager(cls, value: str) -> str:
        if value not in PACKAGE_MANAGER_MAP:
            raise UnknownPackageManagerError(value)
        return value

    @field_validator("default_framework")
    @classmethod
    def _known_framework(cls, value: str) -> str:
        if value not in FRAMEWORK_MAP:
            raise UnknownFrameworkError(value)
        return value

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def project_dir(self, project_name: str) -> Path:
        """Directory the generator will create for *project_name*."""
        return (self.working_dir / project_name).resolve()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            EQUALIZER_PROJECT_NAME, EQUALIZER_PACKAGE_MANAGER,
            EQUALIZER_FRAMEWORK, EQUALIZER_TYPESCRIPT, EQUALIZER_WORKING_DIR,
            EQUALIZER_COMMAND_TIMEOUT, EQUALIZER_NO_BANNER.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EQUALIZER_PROJECT_NAME"):
            kwargs["default_project_name"] = os.environ["EQUALIZER_PROJECT_NAME"]
        if os.environ.get("EQUALIZER_PACKAGE_MANAGER"):
            kwargs["default_package_manager"] = os.environ["EQUALIZER_PACKAGE_MANAGER"]
        if os.environ.get("EQUALIZER_FRAMEWORK"):
            kwargs["default_framework"] = os.environ["EQUALIZER_FRAMEWORK"]
        if os.environ.get("EQUALIZER_TYPESCRIPT"):
            kwargs["default_typescript"] = os.environ["EQUALIZER_TYPESCRIPT"].lower() in _TRUTHY
        if os.environ.get("EQUALIZER_WORKING_DIR"):
            kwargs["working_dir"] = Path(os.environ["EQUALIZER_WORKING_DIR"])
        if os.environ.get("EQUALIZER_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["EQUALIZER_COMMAND_TIMEOUT"])
        if os.environ.get("EQUALIZER_NO_BANNER"):
            kwargs["show_banner"] = os.environ["EQUALIZER_NO_BANNER"].lower() not in _TRUTHY

        return cls(**kwargs)
