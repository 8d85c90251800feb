"""The single per-run input type and the blueprint derived from it.

Interactive prompts, command-line flags and browser payloads all end up as a
``ProjectSetup``; :func:`summarize_blueprint` turns it into everything the
scaffolder and the summary screen need.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from equalizer.blueprint.commands import build_install_command, create_commands
from equalizer.blueprint.engine import (
    TAILWIND_OPTION_ID,
    aggregate_selections,
    build_architecture,
    sanitize_selections,
)
from equalizer.blueprint.models import AggregationResult, CommandSpec, Context, Selection
from equalizer.blueprint.registry import FRAMEWORK_MAP, PACKAGE_MANAGER_MAP
from equalizer.errors import UnknownFrameworkError, UnknownPackageManagerError
from equalizer.utils import DEFAULT_PROJECT_NAME, slugify_project_name


class SetupMode(str, Enum):
    """Where a setup came from."""
    CLI = "cli"
    UI = "ui"
    FLAGS = "flags"


class ProjectSetup(BaseModel):
    """Everything the user decided for one scaffolding run.

    Unknown framework or package-manager ids are rejected here, before any
    subprocess runs.  The selection is sanitised against the framework, and
    frameworks that require TypeScript force ``use_typescript``.
    """
    model_config = ConfigDict(frozen=True)

    mode: SetupMode = Field(default=SetupMode.CLI)
    project_name: str = Field(default=DEFAULT_PROJECT_NAME, min_length=1)
    package_manager: str = Field(default="pnpm")
    framework: str = Field(default="react")
    use_typescript: bool = Field(default=True)
    selection: Selection = Field(default_factory=Selection)

    @model_validator(mode="before")
    @classmethod
    def _force_typescript(cls, data: Any) -> Any:
        if isinstance(data, dict):
            framework = FRAMEWORK_MAP.get(data.get("framework", "react"))
            if framework is not None and framework.force_typescript:
                data = {**data, "use_typescript": True}
        return data

    @field_validator("project_name", mode="before")
    @classmethod
    def _slugify_name(cls, value: Any) -> Any:
        # The name becomes a directory under working_dir; keep it a single slug.
        if value is None or isinstance(value, str):
            return slugify_project_name(value)
        return value

    @field_validator("package_manager")
    @classmethod
    def _known_manager(cls, value: str) -> str:
        if value not in PACKAGE_MANAGER_MAP:
            raise UnknownPackageManagerError(value)
        return value

    @field_validator("framework")
    @classmethod
    def _known_framework(cls, value: str) -> str:
        if value not in FRAMEWORK_MAP:
            raise UnknownFrameworkError(value)
        return value

    @field_validator("selection")
    @classmethod
    def _sanitize(cls, value: Selection, info: ValidationInfo) -> Selection:
        framework = info.data.get("framework")
        if framework is None:
            return value
        return sanitize_selections(value, framework)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def context(self) -> Context:
        return Context(framework=self.framework, use_typescript=self.use_typescript)

    @property
    def use_tailwind(self) -> bool:
        return TAILWIND_OPTION_ID in self.selection.styling

    @property
    def language(self) -> str:
        return "TypeScript" if self.use_typescript else "JavaScript"

    @property
    def framework_label(self) -> str:
        return FRAMEWORK_MAP[self.framework].label

    @property
    def package_manager_label(self) -> str:
        return PACKAGE_MANAGER_MAP[self.package_manager].label


class Blueprint(BaseModel):
    """Derived plan for one setup: packages, commands, notes and tree sketch."""
    model_config = ConfigDict(frozen=True)

    aggregation: AggregationResult
    architecture: tuple[str, ...] = Field(default=())
    create_commands: tuple[CommandSpec, ...] = Field(default=())
    runtime_command: Optional[str] = None
    dev_command: Optional[str] = None
    framework_notes: tuple[str, ...] = Field(default=())


def summarize_blueprint(setup: ProjectSetup) -> Blueprint:
    """Aggregate the selection and resolve every command for *setup*."""
    aggregation = aggregate_selections(setup.selection, setup.context)
    return Blueprint(
        aggregation=aggregation,
        architecture=tuple(build_architecture(setup.framework, setup.use_tailwind)),
        create_commands=tuple(
            create_commands(
                setup.framework,
                setup.package_manager,
                setup.use_typescript,
                setup.project_name,
            )
        ),
        runtime_command=build_install_command(
            setup.package_manager, aggregation.dependencies, dev=False
        ),
        dev_command=build_install_command(
            setup.package_manager, aggregation.dev_dependencies, dev=True
        ),
        framework_notes=FRAMEWORK_MAP[setup.framework].notes,
    )
