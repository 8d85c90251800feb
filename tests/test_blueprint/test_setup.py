"""Tests for ProjectSetup validation and summarize_blueprint.

Tests cover:
- Defaults and forced TypeScript for Angular
- Unknown manager / framework rejection
- Selection sanitised against the framework
- Derived properties (context, use_tailwind, labels)
- Blueprint contents
"""

from __future__ import annotations

import pytest

from equalizer.blueprint.models import Selection
from equalizer.blueprint.setup import ProjectSetup, SetupMode, summarize_blueprint
from equalizer.config import Config
from equalizer.errors import UnknownFrameworkError, UnknownPackageManagerError

pytestmark = pytest.mark.unit


class TestProjectSetup:
    def test_defaults(self):
        setup = ProjectSetup()
        assert setup.mode == SetupMode.CLI
        assert setup.project_name == "my-app"
        assert setup.package_manager == "pnpm"
        assert setup.framework == "react"
        assert setup.use_typescript is True
        assert setup.selection == Selection()

    def test_angular_forces_typescript(self):
        setup = ProjectSetup(framework="angular", use_typescript=False)
        assert setup.use_typescript is True
        assert setup.language == "TypeScript"

    def test_javascript_kept_for_other_frameworks(self):
        setup = ProjectSetup(framework="svelte", use_typescript=False)
        assert setup.language == "JavaScript"

    def test_project_name_slugified(self):
        assert ProjectSetup(project_name="My Shop!").project_name == "my-shop"
        assert ProjectSetup(project_name="   ").project_name == "my-app"

    def test_project_name_cannot_leave_working_dir(self, tmp_path):
        setup = ProjectSetup(project_name="../outside")
        assert setup.project_name == "outside"
        project_dir = Config(working_dir=tmp_path).project_dir(setup.project_name)
        assert project_dir.parent == tmp_path.resolve()

    def test_unknown_package_manager(self):
        with pytest.raises(UnknownPackageManagerError):
            ProjectSetup(package_manager="deno")

    def test_unknown_framework(self):
        with pytest.raises(UnknownFrameworkError):
            ProjectSetup(framework="solid")

    def test_selection_sanitised_for_framework(self):
        setup = ProjectSetup(
            framework="vue",
            selection=Selection(styling=("chakra", "tailwind"), state=("pinia", "zustand")),
        )
        assert setup.selection.styling == ("tailwind",)
        assert setup.selection.state == ("pinia",)

    def test_derived_properties(self, react_setup):
        assert react_setup.use_tailwind is True
        assert react_setup.context.framework == "react"
        assert react_setup.context.use_typescript is True
        assert react_setup.framework_label == "React + Vite"
        assert react_setup.package_manager_label == "pnpm"

    def test_no_tailwind(self, vue_setup):
        assert vue_setup.use_tailwind is False


class TestSummarizeBlueprint:
    def test_react_blueprint(self, react_setup):
        blueprint = summarize_blueprint(react_setup)
        assert blueprint.runtime_command == "pnpm add @reduxjs/toolkit axios react-redux"
        assert blueprint.dev_command.startswith("pnpm add -D @tailwindcss/postcss")
        assert len(blueprint.create_commands) == 1
        assert blueprint.create_commands[0].argv[:3] == ["pnpm", "create", "vite@latest"]
        assert "|   |-- styles/ (tailwind.css, tokens, utilities)" in blueprint.architecture
        assert blueprint.framework_notes[0].startswith("Equalizer runs Vite")

    def test_bare_blueprint_has_no_installs(self, bare_setup):
        blueprint = summarize_blueprint(bare_setup)
        assert blueprint.runtime_command is None
        assert blueprint.dev_command is None
        assert blueprint.aggregation.notes == ()

    def test_vue_blueprint(self, vue_setup):
        blueprint = summarize_blueprint(vue_setup)
        assert blueprint.runtime_command == "npm install pinia"
        assert blueprint.dev_command == "npm install --save-dev @vitest/ui jsdom vitest"
        assert blueprint.create_commands[0].interactive is True
