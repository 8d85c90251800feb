"""Shared utility functions for Equalizer.

Provides async command execution, project-name slugs, JSON reading and the
Rich-based console helpers every other module prints through.
"""

from __future__ import annotations

import asyncio
import json
import os
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.rule import Rule
from rich.table import Table

console = Console()

DEFAULT_PROJECT_NAME = "my-app"

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 900,
    input: str | None = None,
    env: dict[str, str] | None = None,
    capture: bool = True,
) -> tuple[int, str, str]:
    """Run a command asynchronously and wait for it to finish.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        input: Optional text written to the child's stdin, which is then
            closed.
        env: Optional extra environment variables merged on top of
            ``os.environ``.
        capture: Whether to capture stdout/stderr.  If ``False`` the child
            inherits the parent's terminal (stdin included, unless *input*
            is given) so it can run prompts of its own.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timeout is reported as
        return code ``-1``.  If *capture* is ``False`` the stdout/stderr
        strings will be empty.

    If the awaiting task is cancelled (Ctrl+C under ``asyncio.run``) the
    child is killed before the cancellation propagates.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    if input is not None:
        stdin_pipe = asyncio.subprocess.PIPE
    else:
        stdin_pipe = None if not capture else asyncio.subprocess.DEVNULL
    output_pipe = asyncio.subprocess.PIPE if capture else None

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=stdin_pipe,
        stdout=output_pipe,
        stderr=output_pipe,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    payload = input.encode("utf-8") if input is not None else None
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(payload), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")
    except asyncio.CancelledError:
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def slugify_project_name(value: str | None) -> str:
    """Turn free-form input into a package-safe project directory name.

    * Trims and lowercases the input.
    * Drops every character other than ``a-z``, ``0-9``, whitespace and ``-``.
    * Turns whitespace runs into single hyphens and collapses hyphen runs.
    * Strips leading/trailing hyphens; an empty result becomes ``my-app``.

    Examples::

        slugify_project_name("My Cool App!!") -> "my-cool-app"
        slugify_project_name("   ") -> "my-app"
    """
    result = (value or "").strip().lower()
    result = re.sub(r"[^a-z0-9\s-]", "", result)
    result = re.sub(r"\s+", "-", result)
    result = re.sub(r"-+", "-", result)
    result = result.strip("-")
    return result or DEFAULT_PROJECT_NAME


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated flag value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file that must contain an object.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8") or "{}")
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


BANNER = r"""
 __ _     _    ______ __ _
|_ / \| ||_||   |  _/|_ |_)
|__\_X|_|| ||___|_/__|__| \
"""


def print_banner() -> None:
    """Print the ASCII banner and tagline."""
    console.print(f"[cyan]{BANNER}[/cyan]", highlight=False)
    console.print("[bold magenta]Compose modern stacks in minutes.[/bold magenta]")


def print_divider(title: str) -> None:
    """Print a full-width rule with a section title."""
    console.print()
    console.print(Rule(f"[bold cyan]{title}[/bold cyan]", style="dim"))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print *data* as a label/value table titled *title*."""
    table = Table(title=title, title_justify="left", show_header=False, box=None, padding=(0, 2))
    table.add_column("label", style="bold", no_wrap=True)
    table.add_column("value")
    for label, value in data.items():
        table.add_row(label, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    console.print(f"[bold green]\u2714 {message}[/bold green]")


def print_error(message: str) -> None:
    console.print(f"[bold red]\u2716 {message}[/bold red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]! {message}[/yellow]")


def print_info(message: str) -> None:
    """Print a cyan informational message."""
    console.print(f"[cyan]{message}[/cyan]")


def create_progress() -> Progress:
    """Create a Rich spinner display for scaffolding steps.

    Returns:
        A ``Progress`` instance suitable for use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
