"""Post-generation patches applied to the freshly created project.

The framework generators decide file names (``tailwind.config.ts`` vs
``.cjs``, ``App.tsx`` vs ``App.jsx``), so every patch first looks for the
first existing candidate and only falls back to a default path where writing
a new file makes sense.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any, Optional, Sequence

from equalizer.blueprint.models import SELECTION_CATEGORIES
from equalizer.blueprint.registry import option_label
from equalizer.blueprint.setup import ProjectSetup
from equalizer.scaffolder.templates import TemplateRenderer, write_file
from equalizer.utils import load_json

TAILWIND_CONFIG_CANDIDATES = (
    "tailwind.config.ts",
    "tailwind.config.js",
    "tailwind.config.mjs",
    "tailwind.config.cjs",
)
POSTCSS_CONFIG_CANDIDATES = (
    "postcss.config.ts",
    "postcss.config.js",
    "postcss.config.mjs",
    "postcss.config.cjs",
)
ENTRY_CANDIDATES = ("src/main.tsx", "src/main.jsx", "src/main.ts", "src/main.js")
APP_COMPONENT_CANDIDATES = ("src/App.tsx", "src/App.jsx")
APP_STYLES_CANDIDATES = ("src/App.css", "src/app.css")

TAILWIND_IMPORT = '@import "tailwindcss";\n'
ORGANIZE_IMPORTS_KEY = "editor.codeActionsOnSave"

_CSS_IMPORT_RE = re.compile(r"""import\s+["'](\./.*\.css)["'];?""")
_TAILWIND_MARKERS = ("@tailwind", '@import "tailwindcss"', "@import 'tailwindcss'")


def find_first_existing(project_dir: Path, candidates: Sequence[str]) -> Optional[Path]:
    """Return the first candidate that exists under *project_dir*."""
    for candidate in candidates:
        path = project_dir / candidate
        if path.exists():
            return path
    return None


def build_spec_sheet(setup: ProjectSetup) -> list[dict[str, str]]:
    """Rows shown on the showcase page, in display order.

    Categories without a selection are left out; ids missing from the
    registry are shown as-is.
    """
    rows = [
        {"label": "Framework", "value": setup.framework_label},
        {"label": "Language", "value": setup.language},
        {"label": "Package manager", "value": setup.package_manager_label},
    ]
    for category in SELECTION_CATEGORIES:
        ids = setup.selection.get(category)
        if ids:
            rows.append({
                "label": category.capitalize(),
                "value": ", ".join(option_label(option_id) for option_id in ids),
            })
    return rows


class ProjectPatcher:
    """Applies Tailwind and editor patches to a generated project."""

    def __init__(self, project_dir: Path, renderer: TemplateRenderer | None = None) -> None:
        self.project_dir = Path(project_dir)
        self.renderer = renderer or TemplateRenderer()

    # -- Tailwind ----------------------------------------------------------

    async def configure_tailwind(self, setup: ProjectSetup) -> list[Path]:
        """Write configs, import the base stylesheet and rewrite the demo page.

        Returns every file that was written.
        """
        written = [
            await self.ensure_tailwind_config(),
            await self.ensure_postcss_config(),
            await self.ensure_tailwind_base_styles(),
            await self.clear_app_styles(),
            await self.inject_showcase(setup),
        ]
        return [path for path in written if path is not None]

    async def ensure_tailwind_config(self) -> Path:
        path = (
            find_first_existing(self.project_dir, TAILWIND_CONFIG_CANDIDATES)
            or self.project_dir / "tailwind.config.js"
        )
        return await self.renderer.render_to_file(
            "tailwind.config.js.j2", path, {"commonjs": path.suffix == ".cjs"}
        )

    async def ensure_postcss_config(self) -> Path:
        path = (
            find_first_existing(self.project_dir, POSTCSS_CONFIG_CANDIDATES)
            or self.project_dir / "postcss.config.js"
        )
        return await self.renderer.render_to_file(
            "postcss.config.js.j2", path, {"commonjs": path.suffix == ".cjs"}
        )

    async def ensure_tailwind_base_styles(self) -> Optional[Path]:
        """Replace the stylesheet the entry module imports with Tailwind's.

        Returns the stylesheet path if it was rewritten.
        """
        entry = find_first_existing(self.project_dir, ENTRY_CANDIDATES)
        if entry is None:
            return None

        match = _CSS_IMPORT_RE.search(await asyncio.to_thread(entry.read_text, "utf-8"))
        if not match:
            return None

        stylesheet = (entry.parent / match.group(1)).resolve()
        if not stylesheet.exists():
            return None

        current = await asyncio.to_thread(stylesheet.read_text, "utf-8")
        if any(marker in current for marker in _TAILWIND_MARKERS):
            return None

        await asyncio.to_thread(write_file, stylesheet, TAILWIND_IMPORT)
        return stylesheet

    async def clear_app_styles(self) -> Optional[Path]:
        path = find_first_existing(self.project_dir, APP_STYLES_CANDIDATES)
        if path is None:
            return None
        await asyncio.to_thread(write_file, path, "")
        return path

    async def inject_showcase(self, setup: ProjectSetup) -> Optional[Path]:
        """Rewrite the root component as a spec sheet of the chosen stack."""
        path = find_first_existing(self.project_dir, APP_COMPONENT_CANDIDATES)
        if path is None:
            return None
        context = {
            "project_name": setup.project_name,
            "specs": build_spec_sheet(setup),
            "typed": path.suffix == ".tsx",
        }
        return await self.renderer.render_to_file("App.jsx.j2", path, context)

    # -- Editor ------------------------------------------------------------

    async def ensure_organize_imports_setting(self) -> Path:
        """Turn on organize-imports-on-save in ``.vscode/settings.json``.

        Existing settings are preserved; an unreadable settings file is
        replaced.
        """
        path = self.project_dir / ".vscode" / "settings.json"
        settings: dict[str, Any] = {}
        if path.exists():
            try:
                settings = await asyncio.to_thread(load_json, path)
            except ValueError:
                # Also covers json.JSONDecodeError.
                settings = {}

        actions = settings.get(ORGANIZE_IMPORTS_KEY)
        if not isinstance(actions, dict):
            actions = {}
        settings[ORGANIZE_IMPORTS_KEY] = {**actions, "source.organizeImports": "always"}

        content = json.dumps(settings, indent=2, ensure_ascii=False) + "\n"
        await asyncio.to_thread(write_file, path, content)
        return path
