"""Main scaffolding orchestrator.

Takes a validated ``ProjectSetup`` and its ``Blueprint`` and creates the
project: framework generator, base install, runtime and dev installs, then
the Tailwind and editor patches.  Steps run strictly one after another; the
first failing command aborts the run and nothing already created is rolled
back.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Awaitable, Callable, Optional

from pydantic import BaseModel, Field
from rich.markup import escape

from equalizer.blueprint.commands import base_install_command, get_install_command
from equalizer.blueprint.models import CommandSpec
from equalizer.blueprint.setup import Blueprint, ProjectSetup, summarize_blueprint
from equalizer.config import Config
from equalizer.errors import CommandError
from equalizer.scaffolder.patcher import ProjectPatcher
from equalizer.scaffolder.progress import StepProgress
from equalizer.scaffolder.templates import TemplateRenderer
from equalizer.utils import (
    console,
    format_duration,
    print_divider,
    print_info,
    print_success,
    print_warning,
    run_command,
)

Runner = Callable[..., Awaitable[tuple[int, str, str]]]

ORGANIZE_IMPORTS_OPTION_ID = "organize-imports"


class ScaffoldResult(BaseModel):
    """What was run and where the project ended up."""

    project_dir: Path
    create_commands: list[CommandSpec] = Field(default_factory=list)
    runtime_command: Optional[str] = None
    dev_command: Optional[str] = None
    patched_files: list[Path] = Field(default_factory=list)


class ProjectScaffolder:
    """Runs the generator and installer commands for one setup.

    Args:
        setup: The validated user choices.
        config: Working directory and command timeout.
        runner: Coroutine with the signature of :func:`equalizer.utils.run_command`;
            replaced by a fake in tests.
        progress: Spinner owner for the steps.
    """

    def __init__(
        self,
        setup: ProjectSetup,
        config: Config | None = None,
        runner: Runner = run_command,
        progress: StepProgress | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.setup = setup
        self.config = config or Config()
        self.runner = runner
        self.progress = progress or StepProgress()
        self.renderer = renderer or TemplateRenderer()

    @property
    def working_dir(self) -> Path:
        return self.config.working_dir.resolve()

    @property
    def project_dir(self) -> Path:
        return self.config.project_dir(self.setup.project_name)

    # -- Public API --------------------------------------------------------

    async def scaffold(self, blueprint: Blueprint | None = None) -> ScaffoldResult:
        """Create the project described by the setup.

        Raises:
            CommandError: The first command that exits non-zero.
        """
        blueprint = blueprint or summarize_blueprint(self.setup)
        manager = self.setup.package_manager
        aggregation = blueprint.aggregation

        print_divider("Scaffolding")
        started = time.monotonic()

        # 1. Framework generator
        for spec in blueprint.create_commands:
            await self._run_step("Creating project", spec, self.working_dir)

        project_dir = self.project_dir
        console.print(f"[bold]Project directory[/bold] [dim]{escape(str(project_dir))}[/dim]")

        # 2. Base install
        await self._run_step(
            "Installing base dependencies", base_install_command(manager), project_dir
        )

        # 3. Runtime libraries
        runtime = get_install_command(manager, aggregation.dependencies, dev=False)
        if runtime is not None:
            await self._run_step("Installing runtime libraries", runtime, project_dir)
        else:
            print_warning("No additional runtime dependencies selected")

        # 4. Dev tooling
        dev = get_install_command(manager, aggregation.dev_dependencies, dev=True)
        if dev is not None:
            await self._run_step("Installing dev tooling", dev, project_dir)
        else:
            print_warning("No additional dev dependencies selected")

        # 5. Patches
        patched = await self._apply_patches(project_dir)

        print_success(f"Scaffolding complete in {format_duration(time.monotonic() - started)}")

        return ScaffoldResult(
            project_dir=project_dir,
            create_commands=list(blueprint.create_commands),
            runtime_command=str(runtime) if runtime else None,
            dev_command=str(dev) if dev else None,
            patched_files=patched,
        )

    # -- Steps -------------------------------------------------------------

    async def _run_step(self, title: str, spec: CommandSpec, cwd: Path) -> None:
        """Run one command under the step spinner, raising on failure."""
        with self.progress.step(title, spec.display(), spinner=not spec.interactive):
            returncode, _stdout, stderr = await self.runner(
                spec.argv,
                cwd=cwd,
                timeout=self.config.command_timeout,
                input=spec.input,
                env=spec.env,
                capture=not spec.interactive,
            )
            if returncode != 0:
                raise CommandError(str(spec), returncode, stderr)

    async def _apply_patches(self, project_dir: Path) -> list[Path]:
        patcher = ProjectPatcher(project_dir, self.renderer)
        patched: list[Path] = []

        if self.setup.use_tailwind:
            print_info("Configuring Tailwind CSS")
            patched.extend(await patcher.configure_tailwind(self.setup))
            print_success("Tailwind CSS configured")

        if ORGANIZE_IMPORTS_OPTION_ID in self.setup.selection.tooling:
            print_info("Enabling organize imports on save for VS Code")
            patched.append(await patcher.ensure_organize_imports_setting())
            print_success("VS Code organize imports configured")

        return patched
