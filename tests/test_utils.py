"""Unit tests for utility functions (equalizer.utils).

Tests cover:
- run_command (success, failure, cwd, stdin input, env vars, timeout, capture=False)
- slugify_project_name (various inputs)
- split_csv
- load_json (use tmp_path)
- format_duration
- Rich output helpers (print_divider, print_summary_table, etc.)
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from equalizer.utils import (
    DEFAULT_PROJECT_NAME,
    create_progress,
    format_duration,
    load_json,
    print_banner,
    print_divider,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
    slugify_project_name,
    split_csv,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_successful_command(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "print('hello')"]
        )
        assert returncode == 0
        assert stdout == "hello"
        assert stderr == ""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_command(self):
        returncode, _stdout, stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(3)"]
        )
        assert returncode == 3
        assert stderr == "bad"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_with_cwd(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"], cwd=tmp_path
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_input_is_written_to_stdin(self):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "print(input().upper())"], input="y\n"
        )
        assert returncode == 0
        assert stdout == "Y"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stdin_closed_without_input(self):
        returncode, _stdout, _stderr = await run_command(
            [sys.executable, "-c", "import sys; sys.exit(0 if sys.stdin.read() == '' else 1)"]
        )
        assert returncode == 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_env_merged(self):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.environ['EQ_TEST'], bool(os.environ.get('PATH')))"],
            env={"EQ_TEST": "on"},
        )
        assert returncode == 0
        assert stdout == "on True"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self):
        returncode, _stdout, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"], timeout=1
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_capture_false_returns_empty_output(self):
        returncode, stdout, stderr = await run_command(
            [sys.executable, "-c", "pass"], capture=False
        )
        assert (returncode, stdout, stderr) == (0, "", "")


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


class TestSlugifyProjectName:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("My Cool App!!", "my-cool-app"),
            ("  spaced   out  ", "spaced-out"),
            ("--edge--case--", "edge-case"),
            ("already-fine", "already-fine"),
            ("under_score", "underscore"),
            ("Ünïcode app", "ncode-app"),
            ("a - b", "a-b"),
        ],
    )
    def test_slugify(self, raw, expected):
        assert slugify_project_name(raw) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["", "   ", "!!!", None])
    def test_blank_falls_back(self, raw):
        assert slugify_project_name(raw) == DEFAULT_PROJECT_NAME == "my-app"

    @pytest.mark.unit
    def test_idempotent(self):
        once = slugify_project_name("Hello World 2")
        assert slugify_project_name(once) == once


class TestSplitCsv:
    @pytest.mark.unit
    def test_split(self):
        assert split_csv(" eslint, prettier ,,vitest ") == ["eslint", "prettier", "vitest"]

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["", None, " , "])
    def test_empty(self, raw):
        assert split_csv(raw) == []


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


class TestLoadJson:
    @pytest.mark.unit
    def test_object(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"a": 1}), encoding="utf-8")
        assert load_json(path) == {"a": 1}

    @pytest.mark.unit
    def test_empty_file_is_empty_object(self, tmp_path: Path):
        path = tmp_path / "empty.json"
        path.write_text("", encoding="utf-8")
        assert load_json(path) == {}

    @pytest.mark.unit
    def test_non_object_rejected(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_json(path)

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_json(path)

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "absent.json")


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    def test_seconds(self):
        assert format_duration(3.7) == "3.7s"

    @pytest.mark.unit
    def test_minutes(self):
        assert format_duration(65.2) == "1m 5s"

    @pytest.mark.unit
    def test_negative(self):
        assert format_duration(-1) == "0.0s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_helpers_print(self):
        with patch("equalizer.utils.console") as mock_console:
            print_banner()
            print_divider("Scaffolding")
            print_success("ok")
            print_error("bad")
            print_warning("careful")
            print_info("fyi")
        assert mock_console.print.call_count >= 7

    @pytest.mark.unit
    def test_print_summary_table(self):
        with patch("equalizer.utils.console") as mock_console:
            print_summary_table({"Framework": "React + Vite"}, title="Project")
        table = mock_console.print.call_args_list[0].args[0]
        assert table.title == "Project"
        assert table.row_count == 1

    @pytest.mark.unit
    def test_create_progress_is_transient(self):
        progress = create_progress()
        assert progress.live.transient is True
