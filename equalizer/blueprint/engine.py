"""Compatibility filtering, selection sanitising and aggregation.

Every function here is pure and total: bad input (unknown ids, missing
categories, options incompatible with the framework) is absorbed rather than
raised, so the same code can serve the interactive wizard and loosely-typed
browser payloads.
"""

from __future__ import annotations

from typing import Mapping, Sequence, Union

from equalizer.blueprint.models import (
    SELECTION_CATEGORIES,
    AggregationResult,
    Context,
    Option,
    Selection,
    option_ids,
)
from equalizer.blueprint.registry import CATEGORY_OPTION_MAPS, OPTION_MAP, OPTIONS_BY_CATEGORY

RawSelection = Union[Selection, Mapping[str, Sequence[str]], None]

TAILWIND_OPTION_ID = "tailwind"


def is_option_supported(option: Option, framework: str) -> bool:
    """Return ``True`` if *option* may be selected for *framework*.

    ``include`` is an allow-list and ``exclude`` a deny-list; an option with
    neither is supported everywhere.
    """
    if option.include is not None and framework not in option.include:
        return False
    if option.exclude is not None and framework in option.exclude:
        return False
    return True


def supported_options(category: str, framework: str) -> list[Option]:
    """Options of *category* that can be picked for *framework*, in registry order."""
    return [
        option
        for option in OPTIONS_BY_CATEGORY.get(category, ())
        if is_option_supported(option, framework)
    ]


def sanitize_selections(raw: RawSelection, framework: str) -> Selection:
    """Drop unknown and incompatible ids from a raw selection.

    An id survives only if it belongs to the registry of *its own* category
    and passes :func:`is_option_supported`.  Input order is preserved and the
    result always holds all four categories.
    """
    if isinstance(raw, Selection):
        raw = raw.as_dict()
    raw = raw or {}

    sanitized: dict[str, tuple[str, ...]] = {}
    for category in SELECTION_CATEGORIES:
        known = CATEGORY_OPTION_MAPS[category]
        sanitized[category] = tuple(
            option_id
            for option_id in option_ids(raw.get(category))
            if option_id in known and is_option_supported(known[option_id], framework)
        )
    return Selection(**sanitized)


def aggregate_selections(selections: RawSelection, context: Context) -> AggregationResult:
    """Fold selections into deduplicated packages and follow-up notes.

    Categories are walked in their fixed order and ids in input order.
    Packages come back sorted; notes keep the order they were first seen in.
    """
    if not isinstance(selections, Selection):
        selections = Selection.from_mapping(selections)

    dependencies: set[str] = set()
    dev_dependencies: set[str] = set()
    notes: dict[str, None] = {}

    for _, option_ids in selections.items():
        for option_id in option_ids:
            option = OPTION_MAP.get(option_id)
            if option is None or not is_option_supported(option, context.framework):
                continue
            spec = option.packages.resolve(context)
            dependencies.update(dep for dep in spec.dependencies if dep)
            dev_dependencies.update(dep for dep in spec.dev_dependencies if dep)
            for note in option.notes.resolve(context):
                if note:
                    notes.setdefault(note, None)

    return AggregationResult(
        dependencies=tuple(sorted(dependencies)),
        dev_dependencies=tuple(sorted(dev_dependencies)),
        notes=tuple(notes),
    )


def build_architecture(framework: str, use_tailwind: bool) -> list[str]:
    """Return the suggested directory tree as display lines.

    The tree is the same for every framework; only the ``styles/`` entry
    changes when Tailwind is part of the styling selection.
    """
    styles = (
        "|   |-- styles/ (tailwind.css, tokens, utilities)"
        if use_tailwind
        else "|   |-- styles/"
    )
    return [
        "project/",
        "|-- public/",
        "|-- src/",
        "|   |-- app/",
        "|   |   |-- layout/",
        "|   |   `-- routes/",
        "|   |-- components/",
        "|   |-- features/",
        "|   |-- lib/",
        "|   |-- services/",
        styles,
        "|   `-- tests/",
        "|-- scripts/",
        "`-- docs/",
    ]
