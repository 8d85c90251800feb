"""Command-line entry point for ``equalizer`` / ``python -m equalizer``.

The setup comes from one of three sources: a saved browser-assistant payload
(``--from-json``), the command-line flags (``--yes``) or the interactive
wizard.  ``--dry-run`` stops after printing the blueprint.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

from rich.markup import escape

from equalizer.blueprint.models import SELECTION_CATEGORIES
from equalizer.blueprint.registry import FRAMEWORK_MAP, option_label
from equalizer.blueprint.setup import Blueprint, ProjectSetup, SetupMode, summarize_blueprint
from equalizer.config import Config
from equalizer.errors import CommandError, EqualizerError, SetupCancelled
from equalizer.inputs import build_setup, load_payload_file
from equalizer.prompts import gather_setup_via_cli
from equalizer.scaffolder.generator import ProjectScaffolder
from equalizer.utils import (
    console,
    print_banner,
    print_divider,
    print_error,
    print_summary_table,
    print_warning,
    split_csv,
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="equalizer",
        description="Equalizer -- compose a frontend stack and scaffold it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  equalizer\n"
            "  equalizer --yes --name shop --framework vue --package-manager npm\n"
            "  equalizer --yes --tooling eslint,prettier --state '' --dry-run\n"
            "  equalizer --from-json equalizer-setup.json\n"
        ),
    )

    parser.add_argument("--name", default=None, help="Project name (slugified)")
    parser.add_argument(
        "--package-manager", default=None, help="npm, pnpm, yarn or bun"
    )
    parser.add_argument(
        "--framework", default=None, help="react, vue, svelte or angular"
    )
    parser.add_argument(
        "--typescript",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate a TypeScript project (always on for angular)",
    )
    for category in SELECTION_CATEGORIES:
        parser.add_argument(
            f"--{category}",
            default=None,
            help=f"Comma-separated {category} option ids ('' for none)",
        )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip the prompts and use flags plus configured defaults",
    )
    parser.add_argument(
        "--from-json",
        default=None,
        help="Read the setup from a browser-assistant payload file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the blueprint without running any command",
    )
    parser.add_argument(
        "--cwd",
        default=None,
        help="Directory the project is created in (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON config file (default: EQUALIZER_* environment variables)",
    )
    return parser


# ---------------------------------------------------------------------------
# Setup sources
# ---------------------------------------------------------------------------


def load_config(args: argparse.Namespace) -> Config:
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    if args.cwd:
        config = config.model_copy(update={"working_dir": Path(args.cwd)})
    return config


def setup_from_flags(args: argparse.Namespace, config: Config) -> ProjectSetup:
    """Build a setup from the flags, filling gaps from *config*.

    A category flag replaces that category's defaults; an empty value
    selects nothing.
    """
    framework = args.framework or config.default_framework
    defaults = config.default_selections.for_framework(framework)
    selections = {}
    for category in SELECTION_CATEGORIES:
        raw = getattr(args, category)
        selections[category] = defaults.get(category) if raw is None else split_csv(raw)

    return build_setup(
        project_name=args.name or config.default_project_name,
        package_manager=args.package_manager or config.default_package_manager,
        framework=framework,
        use_typescript=(
            config.default_typescript if args.typescript is None else args.typescript
        ),
        selections=selections,
        mode=SetupMode.FLAGS,
    )


def resolve_setup(args: argparse.Namespace, config: Config) -> ProjectSetup:
    if args.from_json:
        return load_payload_file(args.from_json)
    if args.yes:
        return setup_from_flags(args, config)
    return gather_setup_via_cli(config)


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def _print_list(title: str, lines: Sequence[str], bullet: str = "- ") -> None:
    console.print(f"[bold]{title}[/bold]")
    if not lines:
        console.print("  [dim]none[/dim]")
        return
    for line in lines:
        console.print(f"  {bullet}{line}", markup=False, highlight=False)


def print_blueprint_summary(setup: ProjectSetup, blueprint: Blueprint, project_dir: Path) -> None:
    """Print everything the user needs to pick up the generated project."""
    print_divider("Blueprint")
    print_summary_table(
        {
            "Project": escape(str(project_dir)),
            "Framework": setup.framework_label,
            "Docs": FRAMEWORK_MAP[setup.framework].docs,
            "Package manager": setup.package_manager_label,
            "Language": setup.language,
        },
        title="Project",
    )

    _print_list("Scaffold commands", [spec.display() for spec in blueprint.create_commands])

    installs = []
    if blueprint.runtime_command:
        installs.append(blueprint.runtime_command)
    if blueprint.dev_command:
        installs.append(blueprint.dev_command)
    _print_list("Install commands", installs)

    _print_list(
        "Follow-up notes",
        [*blueprint.aggregation.notes, *blueprint.framework_notes],
    )
    _print_list("Suggested architecture", list(blueprint.architecture), bullet="")

    print_summary_table(
        {
            category.capitalize(): ", ".join(
                option_label(option_id) for option_id in setup.selection.get(category)
            )
            or "none"
            for category in SELECTION_CATEGORIES
        },
        title="Selections",
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point.  Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
        if config.show_banner:
            print_banner()

        setup = resolve_setup(args, config)
        blueprint = summarize_blueprint(setup)
        project_dir = config.project_dir(setup.project_name)

        if args.dry_run:
            print_blueprint_summary(setup, blueprint, project_dir)
            print_warning("Dry run: no command was executed.")
            return EXIT_OK

        scaffolder = ProjectScaffolder(setup, config)
        result = asyncio.run(scaffolder.scaffold(blueprint))
        print_blueprint_summary(setup, blueprint, result.project_dir)
        return EXIT_OK

    except (SetupCancelled, KeyboardInterrupt):
        print_warning("Setup cancelled.")
        return EXIT_CANCELLED
    except CommandError as exc:
        print_error(f"Error: {escape(str(exc))}")
        if exc.stderr:
            console.print(exc.stderr, markup=False, highlight=False, style="dim")
        return EXIT_FAILURE
    except (EqualizerError, ValueError) as exc:
        # ValueError also covers pydantic.ValidationError.
        print_error(f"Error: {escape(str(exc))}")
        return EXIT_FAILURE
    except FileNotFoundError as exc:
        print_error(f"Error: file not found: {escape(str(exc.filename))}")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
