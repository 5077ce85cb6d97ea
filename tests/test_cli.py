"""Tests for the command line interface."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from codequeue.__main__ import main, parse_args
from codequeue.models import StatusField, StatusOption


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


def run(project_root: Path, *argv: str) -> int:
    state_file = project_root.parent / "state.yaml"
    with pytest.raises(SystemExit) as exc_info:
        main(["--project-root", str(project_root), "--state-file", str(state_file), *argv])
    return exc_info.value.code


def read_config(project_root: Path) -> dict:
    return yaml.safe_load((project_root / "codequeue.yml").read_text())


class TestParseArgs:
    """Tests for argument parsing."""

    def test_scan_options(self):
        """scan takes files and flags."""
        args = parse_args(["scan", "a.py", "b.py", "--on-save", "--dry-run"])
        assert args.command == "scan"
        assert args.files == [Path("a.py"), Path("b.py")]
        assert args.on_save
        assert args.dry_run

    def test_verbosity_counts(self):
        """-vv raises verbosity to 2."""
        assert parse_args(["-vv", "providers"]).verbose == 2

    def test_command_required(self):
        """A subcommand is required."""
        with pytest.raises(SystemExit):
            parse_args([])


class TestScanCommand:
    """Tests for the scan subcommand."""

    def test_unconfigured_provider(self, project_root: Path, capsys):
        """Scanning with an unconfigured provider fails."""
        path = project_root / "a.py"
        path.write_text("# TODO: x\n")

        assert run(project_root, "scan", str(path)) == 1
        assert "not configured" in capsys.readouterr().out

    def test_dry_run(self, project_root: Path, capsys):
        """Dry run lists planned creations without a provider."""
        path = project_root / "a.py"
        path.write_text("x = 1\n# TODO(bug): handle None\n")

        assert run(project_root, "scan", "--dry-run", str(path)) == 0
        assert "+ a.py:2 [bug] handle None" in capsys.readouterr().out

    def test_missing_file(self, project_root: Path, capsys):
        """Missing files are reported and fail the command."""
        assert run(project_root, "scan", "--dry-run", str(project_root / "nope.py")) == 1
        assert "Not a file" in capsys.readouterr().out

    def test_on_save_disabled(self, project_root: Path, capsys, monkeypatch):
        """Save-triggered scans exit quietly when auto scan is off."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        (project_root / "codequeue.yml").write_text("scanner:\n  auto_scan_on_save: false\n")
        path = project_root / "a.py"
        path.write_text("# TODO: x\n")

        assert run(project_root, "scan", "--on-save", str(path)) == 0
        assert "not configured" not in capsys.readouterr().out


class TestConfigureCommands:
    """Tests for provider configuration subcommands."""

    def test_generate(self, project_root: Path):
        """generate writes codequeue.yml."""
        assert run(project_root, "generate") == 0
        assert read_config(project_root)["provider"] == "github"

    def test_providers(self, project_root: Path, capsys):
        """providers lists all providers and marks the active one."""
        assert run(project_root, "providers") == 0
        out = capsys.readouterr().out
        assert "* github" in out
        assert "trello" in out
        assert "apple_reminders" in out

    def test_use(self, project_root: Path):
        """use switches the active provider."""
        assert run(project_root, "use", "trello") == 0
        assert read_config(project_root)["provider"] == "trello"

    def test_use_unknown(self, project_root: Path, capsys):
        """use rejects unknown providers."""
        assert run(project_root, "use", "jira") == 1
        assert "Unknown provider" in capsys.readouterr().out

    def test_set(self, project_root: Path):
        """set writes a provider setting."""
        assert run(project_root, "set", "trello", "board_id", "B1") == 0
        assert read_config(project_root)["trello"]["board_id"] == "B1"

    def test_set_unknown_provider(self, project_root: Path):
        """set rejects unknown providers."""
        assert run(project_root, "set", "jira", "x", "y") == 1

    def test_statuses_reminders(self, project_root: Path, capsys):
        """statuses lists the active provider's columns."""
        run(project_root, "use", "apple_reminders")
        capsys.readouterr()

        assert run(project_root, "statuses") == 0
        assert "Default" in capsys.readouterr().out

    def test_set_status(self, project_root: Path):
        """set-status stores the matching GitHub status."""
        statuses = [
            StatusOption(id="S1", name="Todo", parent_id="F"),
            StatusOption(id="S2", name="In Progress", parent_id="F"),
        ]
        with patch(
            "codequeue.providers.github.GitHubProvider.get_statuses", return_value=statuses
        ):
            assert run(project_root, "set-status", "in progress") == 0

        status = read_config(project_root)["github"]["status"]
        assert status == {"field_id": "F", "option_id": "S2", "name": "In Progress"}

    def test_set_status_unknown(self, project_root: Path):
        """set-status fails when no status matches."""
        with patch("codequeue.providers.github.GitHubProvider.get_statuses", return_value=[]):
            assert run(project_root, "set-status", "Todo") == 1

    def test_sync_priorities(self, project_root: Path):
        """sync-priorities stores the Priority field options."""
        field = StatusField(
            field_id="FP",
            options=[StatusOption(id="P1", name="High", parent_id="FP")],
        )
        with patch(
            "codequeue.providers.github.GitHubProvider.get_priorities", return_value=field
        ):
            assert run(project_root, "sync-priorities") == 0

        priority = read_config(project_root)["github"]["priority"]
        assert priority == {"field_id": "FP", "options": [{"id": "P1", "name": "High"}]}

    def test_use_broken_config(self, project_root: Path, capsys):
        """use reports an unreadable codequeue.yml."""
        (project_root / "codequeue.yml").write_text("provider: [unclosed\n")
        assert run(project_root, "use", "trello") == 1
        assert "Cannot update" in capsys.readouterr().out

    def test_set_status_broken_config(self, project_root: Path, capsys):
        """set-status reports an unreadable codequeue.yml."""
        (project_root / "codequeue.yml").write_text("provider: [unclosed\n")
        statuses = [StatusOption(id="S1", name="Todo", parent_id="F")]
        with patch(
            "codequeue.providers.github.GitHubProvider.get_statuses", return_value=statuses
        ):
            assert run(project_root, "set-status", "Todo") == 1
        assert "Cannot update" in capsys.readouterr().out

    def test_sync_priorities_broken_config(self, project_root: Path, capsys):
        """sync-priorities reports an unreadable codequeue.yml."""
        (project_root / "codequeue.yml").write_text("provider: [unclosed\n")
        field = StatusField(
            field_id="FP",
            options=[StatusOption(id="P1", name="High", parent_id="FP")],
        )
        with patch(
            "codequeue.providers.github.GitHubProvider.get_priorities", return_value=field
        ):
            assert run(project_root, "sync-priorities") == 1
        assert "Cannot update" in capsys.readouterr().out
