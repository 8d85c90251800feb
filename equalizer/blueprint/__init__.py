"""Equalizer blueprint engine.

Maps per-category option picks to framework-compatible selections,
deduplicated package lists, follow-up notes and a suggested directory tree.

Usage::

    from equalizer.blueprint import Context, aggregate_selections, sanitize_selections

    selection = sanitize_selections({"styling": ["tailwind"], "tooling": ["eslint"]}, "react")
    result = aggregate_selections(selection, Context(framework="react", use_typescript=True))
    print(result.dev_dependencies)
"""

from equalizer.blueprint.commands import (
    build_install_command,
    create_commands,
    get_install_command,
)
from equalizer.blueprint.engine import (
    aggregate_selections,
    build_architecture,
    is_option_supported,
    sanitize_selections,
    supported_options,
)
from equalizer.blueprint.models import (
    SELECTION_CATEGORIES,
    SINGLE_CHOICE_CATEGORIES,
    AggregationResult,
    CommandSpec,
    Computed,
    Context,
    Option,
    PackageSpec,
    Selection,
    Static,
)
from equalizer.blueprint.setup import Blueprint, ProjectSetup, SetupMode, summarize_blueprint

__all__ = [
    "SELECTION_CATEGORIES",
    "SINGLE_CHOICE_CATEGORIES",
    "AggregationResult",
    "Blueprint",
    "CommandSpec",
    "Computed",
    "Context",
    "Option",
    "PackageSpec",
    "ProjectSetup",
    "Selection",
    "SetupMode",
    "Static",
    "aggregate_selections",
    "build_architecture",
    "build_install_command",
    "create_commands",
    "get_install_command",
    "is_option_supported",
    "sanitize_selections",
    "summarize_blueprint",
    "supported_options",
]
