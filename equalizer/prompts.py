"""Interactive terminal wizard.

Asks for the project name, package manager, framework, TypeScript and one
step per option category, then hands the answers to
:func:`equalizer.inputs.build_setup`.  Ctrl+C or end-of-input at any prompt
raises :class:`SetupCancelled`.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence, TypeVar

from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from equalizer.blueprint.engine import supported_options
from equalizer.blueprint.models import SELECTION_CATEGORIES, SINGLE_CHOICE_CATEGORIES, Option
from equalizer.blueprint.registry import FRAMEWORK_MAP, FRAMEWORKS, PACKAGE_MANAGERS
from equalizer.blueprint.setup import ProjectSetup, SetupMode
from equalizer.config import Config
from equalizer.errors import SetupCancelled
from equalizer.inputs import build_setup
from equalizer.utils import console, print_error, split_csv

R = TypeVar("R")

SKIP = "none"

CATEGORY_MESSAGES: dict[str, str] = {
    "styling": "Pick the design system and styling layer",
    "data": "Choose the data fetching strategy",
    "state": "Choose the state management tool",
    "tooling": "Select the quality tooling (comma-separated)",
}


def _ask(prompt: Callable[..., R], *args: Any, **kwargs: Any) -> R:
    """Call a Rich prompt, turning an abort into ``SetupCancelled``."""
    try:
        return prompt(*args, **kwargs)
    except (KeyboardInterrupt, EOFError) as exc:
        raise SetupCancelled("Setup stopped.") from exc


def _print_choices(title: str, rows: Sequence[tuple[str, str, str]]) -> None:
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("id", style="bold cyan", no_wrap=True)
    table.add_column("label")
    table.add_column("hint", style="dim")
    for row in rows:
        table.add_row(*row)
    console.print(table)


# ---------------------------------------------------------------------------
# Individual questions
# ---------------------------------------------------------------------------


def ask_project_name(default: str) -> str:
    return _ask(Prompt.ask, "Project name", default=default, console=console)


def ask_package_manager(default: str) -> str:
    _print_choices(
        "Package managers",
        [
            (m.id, m.label, f"{m.description} ({m.badge})" if m.badge else m.description)
            for m in PACKAGE_MANAGERS
        ],
    )
    return _ask(
        Prompt.ask,
        "Choose your package manager",
        choices=[m.id for m in PACKAGE_MANAGERS],
        default=default,
        console=console,
    )


def ask_framework(default: str) -> str:
    _print_choices("Frameworks", [(f.id, f.label, f.description) for f in FRAMEWORKS])
    return _ask(
        Prompt.ask,
        "Select your framework",
        choices=[f.id for f in FRAMEWORKS],
        default=default,
        console=console,
    )


def ask_typescript(default: bool) -> bool:
    return _ask(Confirm.ask, "Do you want TypeScript?", default=default, console=console)


def ask_category(category: str, framework: str, defaults: Sequence[str] = ()) -> list[str]:
    """Ask for the options of one category.

    Only options supported by *framework* are offered; a category with none
    is skipped silently.  Single-choice categories accept one id or
    ``none``; tooling accepts a comma-separated list or ``none``.
    """
    options: list[Option] = supported_options(category, framework)
    if not options:
        return []

    ids = [option.id for option in options]
    preselected = [option_id for option_id in defaults if option_id in ids]
    _print_choices(category.capitalize(), [(o.id, o.label, o.description) for o in options])

    if category in SINGLE_CHOICE_CATEGORIES:
        answer = _ask(
            Prompt.ask,
            CATEGORY_MESSAGES[category],
            choices=[*ids, SKIP],
            default=preselected[0] if preselected else SKIP,
            console=console,
        )
        return [] if answer == SKIP else [answer]

    while True:
        answer = _ask(
            Prompt.ask,
            CATEGORY_MESSAGES[category],
            default=",".join(preselected) or SKIP,
            console=console,
        )
        picked = [] if answer.strip().lower() == SKIP else split_csv(answer)
        unknown = [option_id for option_id in picked if option_id not in ids]
        if not unknown:
            # Keep the first occurrence of repeated ids.
            return list(dict.fromkeys(picked))
        print_error(f"Unknown option(s): {escape(', '.join(unknown))}")


# ---------------------------------------------------------------------------
# Full interview
# ---------------------------------------------------------------------------


def gather_setup_via_cli(config: Config) -> ProjectSetup:
    """Run the whole interview and return the validated setup.

    Raises:
        SetupCancelled: If the user aborts any prompt.
    """
    project_name = ask_project_name(config.default_project_name)
    package_manager = ask_package_manager(config.default_package_manager)
    framework = ask_framework(config.default_framework)

    if FRAMEWORK_MAP[framework].force_typescript:
        use_typescript = True
    else:
        use_typescript = ask_typescript(config.default_typescript)

    defaults = config.default_selections.for_framework(framework)
    selections = {
        category: ask_category(category, framework, defaults.get(category))
        for category in SELECTION_CATEGORIES
    }

    return build_setup(
        project_name=project_name,
        package_manager=package_manager,
        framework=framework,
        use_typescript=use_typescript,
        selections=selections,
        mode=SetupMode.CLI,
    )
