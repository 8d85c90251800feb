"""Scoped spinner ownership for scaffolding steps.

Exactly one spinner is live at a time and it belongs to the ``with`` block of
the step that started it, so it is stopped on success, failure and Ctrl+C
alike without any module-level "active spinner" state.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from rich.markup import escape
from rich.progress import Progress

from equalizer.utils import console, create_progress


class StepProgress:
    """Shows a spinner per step and prints a ``[done]``/``[failed]`` marker."""

    def __init__(self, factory: Callable[[], Progress] = create_progress) -> None:
        self._factory = factory
        self.active: Optional[str] = None

    @contextmanager
    def step(self, title: str, detail: str = "", spinner: bool = True) -> Iterator[None]:
        """Run the body of the ``with`` block under a spinner titled *title*.

        With ``spinner=False`` the title is printed once instead, leaving the
        terminal to a child process that prompts on its own.
        """
        if self.active is not None:
            raise RuntimeError(f"step {title!r} started while {self.active!r} is running")

        description = f"[cyan]{title}[/cyan] [dim]{escape(detail)}[/dim]" if detail else f"[cyan]{title}[/cyan]"
        self.active = title
        progress = self._factory() if spinner else None
        if progress is None:
            console.print(description)
        else:
            progress.start()
            progress.add_task(description, total=None)
        try:
            yield
        except (KeyboardInterrupt, asyncio.CancelledError):
            self._stop(progress)
            console.print(f"[red]\\[cancelled] {title}[/red]")
            raise
        except BaseException:
            self._stop(progress)
            console.print(f"[red]\\[failed] {title}[/red]")
            raise
        else:
            self._stop(progress)
            console.print(f"[green]\\[done] {title}[/green]")
        finally:
            self.active = None

    @staticmethod
    def _stop(progress: Optional[Progress]) -> None:
        if progress is not None:
            progress.stop()
