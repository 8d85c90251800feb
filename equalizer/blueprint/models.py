"""Data model for the blueprint engine.

Registry entries (``Option``, ``Framework``) carry callables and are plain
frozen dataclasses.  Everything that crosses the boundary to the CLI, the
browser payload adapter or the scaffolder is a frozen Pydantic v2 model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterator, Mapping, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class Category(str, Enum):
    """Selection categories, in the order they are prompted and aggregated."""
    STYLING = "styling"
    DATA = "data"
    STATE = "state"
    TOOLING = "tooling"


SELECTION_CATEGORIES: tuple[str, ...] = tuple(c.value for c in Category)

# Categories where the interactive flow allows at most one id.
SINGLE_CHOICE_CATEGORIES: tuple[str, ...] = (
    Category.STYLING.value,
    Category.DATA.value,
    Category.STATE.value,
)


def option_ids(value: Any) -> list[str]:
    """Coerce a loose category value into a list of option ids.

    A bare string is one id; non-string items of a list are dropped and
    anything else yields no ids.
    """
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []


# ---------------------------------------------------------------------------
# Per-run values
# ---------------------------------------------------------------------------

class Context(BaseModel):
    """Facts passed to option rules that branch on the target stack."""
    model_config = ConfigDict(frozen=True)

    framework: str = Field(..., description="Active framework id")
    use_typescript: bool = Field(default=True, description="Whether the project is TypeScript")


class PackageSpec(BaseModel):
    """Packages an option contributes to the generated project."""
    model_config = ConfigDict(frozen=True)

    dependencies: tuple[str, ...] = Field(default=())
    dev_dependencies: tuple[str, ...] = Field(default=())


class Selection(BaseModel):
    """Option ids chosen per category.

    All four categories are always present; order inside a category is the
    order the user picked them in.
    """
    model_config = ConfigDict(frozen=True)

    styling: tuple[str, ...] = Field(default=())
    data: tuple[str, ...] = Field(default=())
    state: tuple[str, ...] = Field(default=())
    tooling: tuple[str, ...] = Field(default=())

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Sequence[str]] | None) -> "Selection":
        """Build a selection from a loose ``{category: [ids]}`` mapping.

        Unknown category keys are ignored and missing ones become empty.
        Values go through :func:`option_ids`.
        """
        raw = raw or {}
        return cls(**{
            category: tuple(option_ids(raw.get(category)))
            for category in SELECTION_CATEGORIES
        })

    def get(self, category: str) -> tuple[str, ...]:
        return getattr(self, category, ())

    def items(self) -> Iterator[tuple[str, tuple[str, ...]]]:
        for category in SELECTION_CATEGORIES:
            yield category, self.get(category)

    def as_dict(self) -> dict[str, list[str]]:
        """Return a plain ``{category: [ids]}`` mapping."""
        return {category: list(ids) for category, ids in self.items()}

    def __contains__(self, option_id: object) -> bool:
        return any(option_id in ids for _, ids in self.items())


class AggregationResult(BaseModel):
    """Deduplicated packages and follow-up notes for one run."""
    model_config = ConfigDict(frozen=True)

    dependencies: tuple[str, ...] = Field(default=(), description="Sorted runtime packages")
    dev_dependencies: tuple[str, ...] = Field(default=(), description="Sorted dev packages")
    notes: tuple[str, ...] = Field(default=(), description="Notes in first-seen order")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class CommandContext(BaseModel):
    """Inputs to a framework's project generator."""
    model_config = ConfigDict(frozen=True)

    manager: str
    use_typescript: bool = True
    project: str


class CommandSpec(BaseModel):
    """One subprocess invocation: executable, arguments and exec options."""
    model_config = ConfigDict(frozen=True)

    executable: str
    args: tuple[str, ...] = Field(default=())
    input: Optional[str] = Field(default=None, description="Text written to the child's stdin")
    env: Optional[dict[str, str]] = Field(default=None, description="Extra environment variables")
    interactive: bool = Field(default=False, description="Child needs the terminal (prompts of its own)")

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)

    def display(self) -> str:
        """Render the command for humans, quoting arguments that contain spaces."""
        parts = [f'"{part}"' if " " in part else part for part in self.args]
        return " ".join([self.executable, *parts])


# ---------------------------------------------------------------------------
# OptionSpec: fixed value or context-dependent rule
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Static(Generic[T]):
    """A value that does not depend on the run context."""

    value: T

    def resolve(self, context: Context) -> T:
        return self.value


@dataclass(frozen=True)
class Computed(Generic[T]):
    """A pure rule evaluated against the run context."""

    evaluate: Callable[[Context], T]

    def resolve(self, context: Context) -> T:
        return self.evaluate(context)


OptionSpec = Union[Static[T], Computed[T]]


# ---------------------------------------------------------------------------
# Registry entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Option:
    """A selectable add-on with compatibility rules and package contribution."""

    id: str
    label: str
    description: str = ""
    include: Optional[tuple[str, ...]] = None
    exclude: Optional[tuple[str, ...]] = None
    packages: OptionSpec[PackageSpec] = field(default_factory=lambda: Static(PackageSpec()))
    notes: OptionSpec[tuple[str, ...]] = field(default_factory=lambda: Static(()))


@dataclass(frozen=True)
class Framework:
    """A target UI framework and the generator that creates it."""

    id: str
    label: str
    description: str
    docs: str
    create_command: Callable[[CommandContext], list[CommandSpec]]
    force_typescript: bool = False
    notes: tuple[str, ...] = ()


class PackageManager(BaseModel):
    """A supported JavaScript package manager."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str = ""
    badge: Optional[str] = None
