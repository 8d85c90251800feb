"""Input adapters that turn user answers into a ``ProjectSetup``.

The interactive wizard, command-line flags and the browser assistant's
``POST /api/complete`` payload all funnel through :func:`build_setup`, so the
blueprint core only ever sees one, validated, shape.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from equalizer.blueprint.engine import sanitize_selections
from equalizer.blueprint.models import option_ids
from equalizer.blueprint.registry import FRAMEWORK_MAP
from equalizer.blueprint.setup import ProjectSetup, SetupMode
from equalizer.errors import PayloadError
from equalizer.utils import slugify_project_name


def build_setup(
    *,
    project_name: Optional[str],
    package_manager: str,
    framework: str,
    use_typescript: bool,
    selections: Mapping[str, Sequence[str]] | None,
    mode: SetupMode = SetupMode.CLI,
) -> ProjectSetup:
    """Slugify the name, sanitise the selection and validate the rest.

    Raises:
        UnknownFrameworkError: For a framework id missing from the registry.
        UnknownPackageManagerError: For a manager id missing from the registry.
    """
    if framework in FRAMEWORK_MAP and FRAMEWORK_MAP[framework].force_typescript:
        use_typescript = True
    return ProjectSetup(
        mode=mode,
        project_name=slugify_project_name(project_name),
        package_manager=package_manager,
        framework=framework,
        use_typescript=use_typescript,
        selection=sanitize_selections(selections, framework),
    )


# ---------------------------------------------------------------------------
# Browser assistant payload
# ---------------------------------------------------------------------------



def _text(payload: Mapping[str, Any], key: str, default: str) -> str:
    value = payload.get(key)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise PayloadError(f"Invalid payload: {key!r} must be a string")
    return value


def _first_present(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def setup_from_payload(payload: Mapping[str, Any]) -> ProjectSetup:
    """Build a setup from the browser assistant's completion payload.

    Recognised fields: ``projectName``, ``packageManager``, ``framework``,
    ``typescript``, ``styling``, ``dataLayer`` (or ``data``), ``state`` and
    ``tooling``.  Missing fields fall back to the wizard defaults and
    unknown option ids are dropped.

    Raises:
        PayloadError: If a scalar field has the wrong type.
    """
    framework = _text(payload, "framework", "react")
    typescript = payload.get("typescript")
    return build_setup(
        project_name=_text(payload, "projectName", "my-app"),
        package_manager=_text(payload, "packageManager", "pnpm"),
        framework=framework,
        use_typescript=True if typescript is None else bool(typescript),
        selections={
            "styling": option_ids(payload.get("styling")),
            "data": option_ids(_first_present(payload, "dataLayer", "data")),
            "state": option_ids(payload.get("state")),
            "tooling": option_ids(payload.get("tooling")),
        },
        mode=SetupMode.UI,
    )


def parse_payload(body: str | bytes) -> ProjectSetup:
    """Decode a raw JSON request body into a setup.

    Raises:
        PayloadError: If the body is not a JSON object.
    """
    try:
        payload = json.loads(body or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PayloadError(f"Invalid payload: {exc}") from exc
    if not isinstance(payload, dict):
        raise PayloadError("Invalid payload: expected a JSON object")
    return setup_from_payload(payload)


def load_payload_file(path: str | Path) -> ProjectSetup:
    """Read a saved browser payload from disk."""
    return parse_payload(Path(path).read_bytes())
