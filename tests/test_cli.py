"""Tests for the command-line entry point (equalizer.cli).

Tests cover:
- Flag parsing into a setup (--yes), including empty category flags
- --from-json payload files
- --dry-run never scaffolds
- Exit codes: 0 success, 1 failure, 130 cancellation
- Blueprint summary output
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from equalizer.blueprint.setup import SetupMode
from equalizer.cli import (
    EXIT_CANCELLED,
    EXIT_FAILURE,
    EXIT_OK,
    build_parser,
    main,
    setup_from_flags,
)
from equalizer.config import Config
from equalizer.errors import CommandError, SetupCancelled

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch: pytest.MonkeyPatch):
    """No banner and no stray EQUALIZER_* settings from the host."""
    for name in ("EQUALIZER_FRAMEWORK", "EQUALIZER_PACKAGE_MANAGER", "EQUALIZER_PROJECT_NAME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("EQUALIZER_NO_BANNER", "1")


@pytest.fixture
def mock_scaffolder():
    """Patch ProjectScaffolder so no command is ever run."""
    with patch("equalizer.cli.ProjectScaffolder") as scaffolder_cls:
        instance = scaffolder_cls.return_value
        instance.scaffold = AsyncMock(return_value=MagicMock(project_dir=Path("/tmp/my-app")))
        yield scaffolder_cls


# ---------------------------------------------------------------------------
# Flag parsing
# ---------------------------------------------------------------------------


class TestSetupFromFlags:
    def test_flags_override_defaults(self):
        args = build_parser().parse_args([
            "--yes", "--name", "Shop Front", "--framework", "vue",
            "--package-manager", "bun", "--no-typescript", "--tooling", "eslint,vitest",
        ])
        setup = setup_from_flags(args, Config())
        assert setup.mode == SetupMode.FLAGS
        assert setup.project_name == "shop-front"
        assert setup.framework == "vue"
        assert setup.package_manager == "bun"
        assert setup.use_typescript is False
        assert setup.selection.tooling == ("eslint", "vitest")
        # Unset categories keep the configured defaults.
        assert setup.selection.styling == ("tailwind",)
        assert setup.selection.state == ()

    def test_empty_flag_selects_nothing(self):
        args = build_parser().parse_args(["--yes", "--styling", "", "--data", ""])
        setup = setup_from_flags(args, Config())
        assert setup.selection.styling == ()
        assert setup.selection.data == ()
        assert setup.selection.state == ("redux-toolkit",)

    def test_config_defaults_used(self):
        args = build_parser().parse_args(["--yes"])
        config = Config(default_project_name="starter", default_typescript=False)
        setup = setup_from_flags(args, config)
        assert setup.project_name == "starter"
        assert setup.use_typescript is False


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMain:
    def test_dry_run_never_scaffolds(self, mock_scaffolder, capsys):
        assert main(["--yes", "--dry-run"]) == EXIT_OK
        mock_scaffolder.assert_not_called()
        out = capsys.readouterr().out
        assert "pnpm create vite@latest my-app" in out
        assert "Dry run" in out

    def test_scaffold_success(self, mock_scaffolder, tmp_path: Path):
        assert main(["--yes", "--cwd", str(tmp_path)]) == EXIT_OK
        setup, config = mock_scaffolder.call_args.args
        assert setup.project_name == "my-app"
        assert config.working_dir == tmp_path
        mock_scaffolder.return_value.scaffold.assert_awaited_once()

    def test_command_failure_exit_code(self, mock_scaffolder):
        mock_scaffolder.return_value.scaffold.side_effect = CommandError("pnpm install", 1, "boom")
        assert main(["--yes"]) == EXIT_FAILURE

    def test_unknown_framework_exit_code(self, mock_scaffolder):
        assert main(["--yes", "--framework", "solid"]) == EXIT_FAILURE
        mock_scaffolder.assert_not_called()

    def test_unknown_manager_exit_code(self, mock_scaffolder):
        assert main(["--yes", "--package-manager", "deno"]) == EXIT_FAILURE
        mock_scaffolder.assert_not_called()

    def test_prompt_cancel_exit_code(self, mock_scaffolder):
        with patch("equalizer.cli.gather_setup_via_cli", side_effect=SetupCancelled("stop")):
            assert main([]) == EXIT_CANCELLED
        mock_scaffolder.assert_not_called()

    def test_ctrl_c_during_scaffold(self, mock_scaffolder):
        mock_scaffolder.return_value.scaffold.side_effect = KeyboardInterrupt()
        assert main(["--yes"]) == EXIT_CANCELLED

    def test_interactive_by_default(self, mock_scaffolder):
        with patch("equalizer.cli.gather_setup_via_cli") as gather:
            gather.return_value = setup_from_flags(build_parser().parse_args(["--yes"]), Config())
            assert main(["--dry-run"]) == EXIT_OK
        gather.assert_called_once()

    def test_from_json(self, mock_scaffolder, tmp_path: Path, capsys):
        payload = tmp_path / "setup.json"
        payload.write_text(
            json.dumps({"projectName": "Docs", "framework": "svelte", "tooling": ["prettier"]}),
            encoding="utf-8",
        )
        assert main(["--from-json", str(payload), "--dry-run"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "create svelte@latest docs" in out
        assert "Prettier" in out

    def test_from_json_missing_file(self, tmp_path: Path):
        assert main(["--from-json", str(tmp_path / "absent.json"), "--dry-run"]) == EXIT_FAILURE

    def test_from_json_bad_payload(self, tmp_path: Path):
        payload = tmp_path / "setup.json"
        payload.write_text("[1, 2]", encoding="utf-8")
        assert main(["--from-json", str(payload), "--dry-run"]) == EXIT_FAILURE

    def test_config_file(self, tmp_path: Path, capsys):
        config_path = Config(default_framework="angular", show_banner=False).save(tmp_path / "c.json")
        assert main(["--config", str(config_path), "--yes", "--dry-run"]) == EXIT_OK
        assert "@angular/cli new my-app" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


class TestSummary:
    def test_summary_sections(self, capsys):
        main(["--yes", "--dry-run", "--state", "", "--tooling", "msw"])
        out = capsys.readouterr().out
        for heading in (
            "Scaffold commands",
            "Install commands",
            "Follow-up notes",
            "Suggested architecture",
            "Selections",
        ):
            assert heading in out
        assert "Build request handlers inside `src/mocks`" in out
        assert "Equalizer runs Vite non-interactively" in out
        assert "styles/ (tailwind.css, tokens, utilities)" in out
        assert "none" in out
