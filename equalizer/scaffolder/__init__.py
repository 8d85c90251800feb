"""Equalizer scaffolder: runs generators and installers, then patches the result.

Quick usage::

    from equalizer.blueprint import ProjectSetup
    from equalizer.scaffolder import ProjectScaffolder

    setup = ProjectSetup(project_name="my-app", framework="react")
    result = await ProjectScaffolder(setup).scaffold()
"""

from equalizer.scaffolder.generator import ProjectScaffolder, ScaffoldResult
from equalizer.scaffolder.patcher import ProjectPatcher, build_spec_sheet
from equalizer.scaffolder.progress import StepProgress
from equalizer.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectPatcher",
    "ProjectScaffolder",
    "ScaffoldResult",
    "StepProgress",
    "TemplateRenderer",
    "build_spec_sheet",
]
