"""Static catalog of package managers, frameworks and add-on options.

Everything in this module is built once at import time and never mutated.
Option ids share a single namespace across all four categories; building the
lookup maps fails loudly if two entries collide.
"""

from __future__ import annotations

from typing import Iterable, TypeVar

from equalizer.blueprint.models import (
    Category,
    CommandContext,
    CommandSpec,
    Computed,
    Context,
    Framework,
    Option,
    PackageManager,
    PackageSpec,
    Static,
)
from equalizer.errors import DuplicateOptionError, UnknownPackageManagerError

E = TypeVar("E")


# ---------------------------------------------------------------------------
# Package managers
# ---------------------------------------------------------------------------

PACKAGE_MANAGERS: tuple[PackageManager, ...] = (
    PackageManager(
        id="pnpm",
        label="pnpm",
        description="Fast installs, workspace support, and efficient disk usage.",
        badge="Recommended",
    ),
    PackageManager(
        id="npm",
        label="npm",
        description="Ships with Node.js. Great for simple single apps.",
    ),
    PackageManager(
        id="yarn",
        label="Yarn",
        description="Plug'n'Play and rock solid monorepo tooling.",
    ),
    PackageManager(
        id="bun",
        label="Bun",
        description="Experimental runtime with a blazing fast package manager.",
    ),
)

_MANAGER_IDS = frozenset(manager.id for manager in PACKAGE_MANAGERS)


# ---------------------------------------------------------------------------
# Frameworks
# ---------------------------------------------------------------------------

def _pick(lookup: dict[str, CommandSpec], manager: str) -> list[CommandSpec]:
    try:
        return [lookup[manager]]
    except KeyError:
        raise UnknownPackageManagerError(manager) from None


def _create_react(ctx: CommandContext) -> list[CommandSpec]:
    template = "react-ts" if ctx.use_typescript else "react"
    tail = (ctx.project, "--", "--template", template, "--no-interactive")
    return _pick(
        {
            # npm asks to confirm installing create-vite.
            "npm": CommandSpec(executable="npm", args=("create", "vite@latest", *tail), input="y\n"),
            "pnpm": CommandSpec(executable="pnpm", args=("create", "vite@latest", *tail)),
            "yarn": CommandSpec(executable="yarn", args=("create", "vite", *tail)),
            "bun": CommandSpec(executable="bun", args=("create", "vite", *tail)),
        },
        ctx.manager,
    )


def _create_with_initializer(name: str):
    """Generator for ``<manager> create <name>`` style initialisers (Vue, SvelteKit)."""

    def create(ctx: CommandContext) -> list[CommandSpec]:
        return _pick(
            {
                "npm": CommandSpec(executable="npm", args=("create", f"{name}@latest", ctx.project), interactive=True),
                "pnpm": CommandSpec(executable="pnpm", args=("create", f"{name}@latest", ctx.project), interactive=True),
                "yarn": CommandSpec(executable="yarn", args=("create", name, ctx.project), interactive=True),
                "bun": CommandSpec(executable="bun", args=("create", name, ctx.project), interactive=True),
            },
            ctx.manager,
        )

    return create


def _create_angular(ctx: CommandContext) -> list[CommandSpec]:
    if ctx.manager not in _MANAGER_IDS:
        raise UnknownPackageManagerError(ctx.manager)
    # The Angular CLI has no bun support.
    manager = "npm" if ctx.manager == "bun" else ctx.manager
    return [
        CommandSpec(
            executable="npx",
            args=(
                "@angular/cli",
                "new",
                ctx.project,
                "--routing",
                "--style=scss",
                "--strict",
                "--package-manager",
                manager,
            ),
            interactive=True,
        )
    ]


FRAMEWORKS: tuple[Framework, ...] = (
    Framework(
        id="react",
        label="React + Vite",
        description="Component driven UI with a massive ecosystem.",
        docs="https://react.dev",
        create_command=_create_react,
        notes=(
            "Equalizer runs Vite non-interactively and handles dependency installation based on your selections.",
        ),
    ),
    Framework(
        id="vue",
        label="Vue 3 + Vite",
        description="Composition API with great TS support and a calm DX.",
        docs="https://vuejs.org",
        create_command=_create_with_initializer("vue"),
        notes=(
            "Choose the TypeScript preset in the Vue CLI wizard if you need typing from day one.",
        ),
    ),
    Framework(
        id="angular",
        label="Angular",
        description="Batteries included framework with DI, RxJS, and CLI generators.",
        docs="https://angular.dev",
        create_command=_create_angular,
        force_typescript=True,
        notes=(
            "Angular enforces TypeScript and encourages feature modules plus standalone components.",
        ),
    ),
    Framework(
        id="svelte",
        label="SvelteKit",
        description="Compiled UI with hybrid rendering and delightful transitions.",
        docs="https://kit.svelte.dev",
        create_command=_create_with_initializer("svelte"),
        notes=(
            "Select the TypeScript+ESLint preset during the SvelteKit wizard for a polished DX.",
        ),
    ),
)


# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------

STYLING_OPTIONS: tuple[Option, ...] = (
    Option(
        id="tailwind",
        label="Tailwind CSS",
        packages=Static(PackageSpec(
            dev_dependencies=("tailwindcss", "@tailwindcss/postcss", "postcss"),
        )),
        notes=Static((
            "Equalizer wires up Tailwind with the PostCSS plugin and base stylesheet automatically.",
        )),
    ),
    Option(
        id="chakra",
        label="Chakra UI",
        include=("react",),
        packages=Static(PackageSpec(
            dependencies=("@chakra-ui/react", "@emotion/react", "@emotion/styled", "framer-motion"),
        )),
        notes=Static(("Wrap your app with `<ChakraProvider>` and define tokens under `theme.ts`.",)),
    ),
    Option(
        id="mui",
        label="MUI",
        include=("react",),
        packages=Static(PackageSpec(
            dependencies=("@mui/material", "@mui/icons-material", "@emotion/react", "@emotion/styled"),
        )),
        notes=Static(("Create a theme with `createTheme` and share it through `<ThemeProvider>`.",)),
    ),
    Option(
        id="styled-components",
        label="styled-components",
        include=("react",),
        packages=Computed(lambda ctx: PackageSpec(
            dependencies=("styled-components",),
            dev_dependencies=("@types/styled-components",) if ctx.use_typescript else (),
        )),
    ),
    Option(
        id="bootstrap",
        label="Bootstrap 5",
        packages=Static(PackageSpec(dependencies=("bootstrap",))),
        notes=Static((
            'Import `"bootstrap/dist/css/bootstrap.min.css"` in your entry module to enable the toolkit.',
        )),
    ),
    Option(
        id="sass",
        label="Sass / SCSS",
        packages=Static(PackageSpec(dev_dependencies=("sass",))),
    ),
)


# ---------------------------------------------------------------------------
# Data fetching
# ---------------------------------------------------------------------------

DATA_OPTIONS: tuple[Option, ...] = (
    Option(
        id="axios",
        label="Axios",
        packages=Static(PackageSpec(dependencies=("axios",))),
    ),
    Option(
        id="react-query",
        label="TanStack Query",
        include=("react",),
        packages=Static(PackageSpec(dependencies=("@tanstack/react-query",))),
        notes=Static(("Expose a shared QueryClient and wrap the app with `<QueryClientProvider>`.",)),
    ),
    Option(
        id="swr",
        label="SWR",
        include=("react",),
        packages=Static(PackageSpec(dependencies=("swr",))),
    ),
    Option(
        id="graphql-request",
        label="graphql-request",
        packages=Static(PackageSpec(dependencies=("graphql-request", "graphql"))),
    ),
    Option(
        id="apollo-client",
        label="Apollo Client",
        packages=Static(PackageSpec(dependencies=("@apollo/client", "graphql"))),
    ),
)


# ---------------------------------------------------------------------------
# State management
# ---------------------------------------------------------------------------

STATE_OPTIONS: tuple[Option, ...] = (
    Option(
        id="redux-toolkit",
        label="Redux Toolkit",
        include=("react",),
        packages=Static(PackageSpec(dependencies=("@reduxjs/toolkit", "react-redux"))),
    ),
    Option(
        id="zustand",
        label="Zustand",
        include=("react",),
        packages=Static(PackageSpec(dependencies=("zustand",))),
    ),
    Option(
        id="jotai",
        label="Jotai",
        include=("react",),
        packages=Static(PackageSpec(dependencies=("jotai",))),
    ),
    Option(
        id="mobx",
        label="MobX",
        include=("react",),
        packages=Static(PackageSpec(dependencies=("mobx", "mobx-react-lite"))),
    ),
    Option(
        id="xstate",
        label="XState",
        packages=Static(PackageSpec(dependencies=("xstate",))),
    ),
    Option(
        id="pinia",
        label="Pinia",
        include=("vue",),
        packages=Static(PackageSpec(dependencies=("pinia",))),
    ),
    Option(
        id="ngrx",
        label="NgRx",
        include=("angular",),
        packages=Static(PackageSpec(dependencies=("@ngrx/store", "@ngrx/effects", "@ngrx/entity"))),
    ),
)


# ---------------------------------------------------------------------------
# Tooling
# ---------------------------------------------------------------------------

_ESLINT_PLUGINS: dict[str, tuple[str, ...]] = {
    "react": ("eslint-plugin-react", "eslint-plugin-react-hooks"),
    "vue": ("eslint-plugin-vue",),
    "svelte": ("eslint-plugin-svelte", "svelte-eslint-parser"),
    "angular": (
        "@angular-eslint/eslint-plugin",
        "@angular-eslint/eslint-plugin-template",
        "@angular-eslint/template-parser",
    ),
}

_TESTING_LIBRARY_PACKAGES: dict[str, tuple[str, ...]] = {
    "react": ("@testing-library/react", "@testing-library/jest-dom"),
    "vue": ("@testing-library/vue", "@testing-library/jest-dom"),
    "svelte": ("@testing-library/svelte",),
    "angular": ("@testing-library/angular",),
}


def _eslint_packages(ctx: Context) -> PackageSpec:
    dev = ["eslint", *_ESLINT_PLUGINS.get(ctx.framework, ())]
    if ctx.use_typescript:
        dev += ["@typescript-eslint/parser", "@typescript-eslint/eslint-plugin"]
    return PackageSpec(dev_dependencies=tuple(dev))


def _testing_library_packages(ctx: Context) -> PackageSpec:
    dev = ["@testing-library/user-event", *_TESTING_LIBRARY_PACKAGES.get(ctx.framework, ())]
    if ctx.framework == "react" and ctx.use_typescript:
        dev.append("@types/testing-library__jest-dom")
    return PackageSpec(dev_dependencies=tuple(dev))


TOOLING_OPTIONS: tuple[Option, ...] = (
    Option(
        id="eslint",
        label="ESLint",
        packages=Computed(_eslint_packages),
        notes=Static(("Run `npx eslint --init` to scaffold the configuration file.",)),
    ),
    Option(
        id="prettier",
        label="Prettier",
        packages=Static(PackageSpec(dev_dependencies=("prettier",))),
        notes=Static(("Create a `.prettierrc` file and wire it into your CI pipeline.",)),
    ),
    Option(
        id="organize-imports",
        label="Organize imports on save",
        notes=Static((
            'Enable organize imports in your editor (VS Code: set "editor.codeActionsOnSave" '
            'to run "source.organizeImports").',
        )),
    ),
    Option(
        id="testing-library",
        label="Testing Library",
        packages=Computed(_testing_library_packages),
    ),
    Option(
        id="vitest",
        label="Vitest",
        exclude=("angular",),
        packages=Static(PackageSpec(dev_dependencies=("vitest", "@vitest/ui", "jsdom"))),
    ),
    Option(
        id="cypress",
        label="Cypress",
        packages=Static(PackageSpec(dev_dependencies=("cypress",))),
    ),
    Option(
        id="playwright",
        label="Playwright",
        packages=Static(PackageSpec(dev_dependencies=("@playwright/test",))),
    ),
    Option(
        id="msw",
        label="MSW",
        packages=Static(PackageSpec(dev_dependencies=("msw",))),
        notes=Static(("Build request handlers inside `src/mocks` and boot them in tests.",)),
    ),
    Option(
        id="storybook",
        label="Storybook",
        notes=Static(("Run `npx storybook@latest init` with the suggested flags for your framework.",)),
    ),
)


# ---------------------------------------------------------------------------
# Lookup maps
# ---------------------------------------------------------------------------

OPTIONS_BY_CATEGORY: dict[str, tuple[Option, ...]] = {
    Category.STYLING.value: STYLING_OPTIONS,
    Category.DATA.value: DATA_OPTIONS,
    Category.STATE.value: STATE_OPTIONS,
    Category.TOOLING.value: TOOLING_OPTIONS,
}


def _index(entries: Iterable[E], kind: str) -> dict[str, E]:
    """Build an ``{id: entry}`` map, refusing duplicate ids."""
    index: dict[str, E] = {}
    for entry in entries:
        key = entry.id  # type: ignore[attr-defined]
        if key in index:
            raise DuplicateOptionError(f"Duplicate {kind} id: {key!r}")
        index[key] = entry
    return index


OPTION_MAP: dict[str, Option] = _index(
    (option for options in OPTIONS_BY_CATEGORY.values() for option in options),
    "option",
)
CATEGORY_OPTION_MAPS: dict[str, dict[str, Option]] = {
    category: _index(options, category) for category, options in OPTIONS_BY_CATEGORY.items()
}
FRAMEWORK_MAP: dict[str, Framework] = _index(FRAMEWORKS, "framework")
PACKAGE_MANAGER_MAP: dict[str, PackageManager] = _index(PACKAGE_MANAGERS, "package manager")


def option_label(option_id: str) -> str:
    """Display label for an option id, falling back to the raw id."""
    option = OPTION_MAP.get(option_id)
    return option.label if option else option_id
