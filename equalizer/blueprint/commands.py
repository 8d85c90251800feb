"""Install-command construction per package manager."""

from __future__ import annotations

from typing import NamedTuple, Optional, Sequence

from equalizer.blueprint.models import CommandContext, CommandSpec
from equalizer.blueprint.registry import FRAMEWORK_MAP
from equalizer.errors import UnknownFrameworkError, UnknownPackageManagerError


class InstallFlavour(NamedTuple):
    """How one package manager spells ``add`` and its dev flag."""

    executable: str
    subcommand: str
    dev_flag: str


INSTALL_FLAVOURS: dict[str, InstallFlavour] = {
    "npm": InstallFlavour("npm", "install", "--save-dev"),
    "pnpm": InstallFlavour("pnpm", "add", "-D"),
    "yarn": InstallFlavour("yarn", "add", "--dev"),
    "bun": InstallFlavour("bun", "add", "-d"),
}


def get_install_command(
    manager: str, packages: Sequence[str], dev: bool = False
) -> Optional[CommandSpec]:
    """Return the command installing *packages*, or ``None`` if there are none.

    Raises:
        UnknownPackageManagerError: If *manager* has no install flavour and
            there is something to install.
    """
    if not packages:
        return None
    flavour = INSTALL_FLAVOURS.get(manager)
    if flavour is None:
        raise UnknownPackageManagerError(manager)
    flags = (flavour.dev_flag,) if dev else ()
    return CommandSpec(
        executable=flavour.executable,
        args=(flavour.subcommand, *flags, *packages),
    )


def build_install_command(
    manager: str, packages: Sequence[str], dev: bool = False
) -> Optional[str]:
    """Plain-string form of :func:`get_install_command`.

    Examples::

        build_install_command("pnpm", ["axios"]) -> "pnpm add axios"
        build_install_command("npm", ["eslint"], dev=True) -> "npm install --save-dev eslint"
    """
    command = get_install_command(manager, packages, dev)
    return str(command) if command else None


def base_install_command(manager: str) -> CommandSpec:
    """``<manager> install`` for the freshly generated project."""
    if manager not in INSTALL_FLAVOURS:
        raise UnknownPackageManagerError(manager)
    return CommandSpec(executable=INSTALL_FLAVOURS[manager].executable, args=("install",))


def create_commands(
    framework: str, manager: str, use_typescript: bool, project: str
) -> list[CommandSpec]:
    """Resolve the generator commands of *framework* for one project."""
    if framework not in FRAMEWORK_MAP:
        raise UnknownFrameworkError(framework)
    context = CommandContext(manager=manager, use_typescript=use_typescript, project=project)
    return FRAMEWORK_MAP[framework].create_command(context)
