"""Shared pytest fixtures for the Equalizer test suite.

Provides reusable fixtures for:
- Temporary working and project directories
- A fake Vite project tree for the patcher
- Ready-made setups (React + Tailwind, Vue, bare React)
- A recording command runner that never spawns a process
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from equalizer.blueprint.setup import ProjectSetup
from equalizer.blueprint.models import Selection
from equalizer.config import Config


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary directory standing in for a generated project (auto-cleanup)."""
    project_dir = tmp_path / "my-app"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def vite_project(tmp_project_dir: Path) -> Path:
    """A minimal React + Vite TypeScript layout as ``create vite`` leaves it."""
    src = tmp_project_dir / "src"
    src.mkdir()
    (src / "main.tsx").write_text(
        "import { StrictMode } from 'react'\n"
        "import { createRoot } from 'react-dom/client'\n"
        "import './index.css'\n"
        "import App from './App.tsx'\n",
        encoding="utf-8",
    )
    (src / "index.css").write_text(":root { color-scheme: dark; }\n", encoding="utf-8")
    (src / "App.tsx").write_text("export default function App() { return null }\n", encoding="utf-8")
    (src / "App.css").write_text("#root { max-width: 1280px; }\n", encoding="utf-8")
    return tmp_project_dir


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config rooted at ``tmp_path`` with the banner turned off."""
    return Config(working_dir=tmp_path, show_banner=False, command_timeout=60)


# ---------------------------------------------------------------------------
# Setups
# ---------------------------------------------------------------------------

@pytest.fixture
def react_setup() -> ProjectSetup:
    """React + TypeScript with Tailwind, Axios, Redux Toolkit and linters."""
    return ProjectSetup(
        project_name="my-app",
        package_manager="pnpm",
        framework="react",
        use_typescript=True,
        selection=Selection(
            styling=("tailwind",),
            data=("axios",),
            state=("redux-toolkit",),
            tooling=("eslint", "prettier"),
        ),
    )


@pytest.fixture
def vue_setup() -> ProjectSetup:
    return ProjectSetup(
        project_name="vue-app",
        package_manager="npm",
        framework="vue",
        use_typescript=False,
        selection=Selection(state=("pinia",), tooling=("vitest",)),
    )


@pytest.fixture
def bare_setup() -> ProjectSetup:
    """React with nothing selected."""
    return ProjectSetup(project_name="bare", package_manager="yarn", framework="react")


# ---------------------------------------------------------------------------
# Mock command runner
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_runner() -> AsyncMock:
    """Stand-in for ``equalizer.utils.run_command`` that always succeeds.

    Usage:
        scaffolder = ProjectScaffolder(setup, config, runner=fake_runner)
        await scaffolder.scaffold()
        argvs = [c.args[0] for c in fake_runner.await_args_list]
    """
    return AsyncMock(return_value=(0, "", ""))

