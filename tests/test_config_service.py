"""Tests for ConfigService."""

from pathlib import Path

import pytest
import yaml

from codequeue.services import ConfigService


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a temporary project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


class TestConfigServiceLoading:
    """Tests for ConfigService file loading."""

    def test_default_on_missing_file(self, project_root: Path):
        """Missing codequeue.yml returns default config."""
        service = ConfigService(project_root)
        config = service.get_config()

        assert config.provider == "github"
        assert not service.has_config_error

    def test_load_valid_config(self, project_root: Path):
        """Valid config loads correctly."""
        (project_root / "codequeue.yml").write_text(
            """
version: 1
provider: trello
scanner:
  snippet_line_count: 3
  auto_scan_on_save: false
trello:
  board_id: B1
  default_list_id: L1
"""
        )
        service = ConfigService(project_root)
        config = service.get_config()

        assert config.provider == "trello"
        assert config.trello.default_list_id == "L1"
        assert service.get_scanner_config().snippet_line_count == 3
        assert not service.get_scanner_config().auto_scan_on_save
        assert not service.has_config_error

    def test_empty_file(self, project_root: Path):
        """Empty file falls back to defaults with an error."""
        (project_root / "codequeue.yml").write_text("")
        service = ConfigService(project_root)

        assert service.get_config().provider == "github"
        assert service.has_config_error
        assert "empty" in service.config_error

    def test_invalid_yaml(self, project_root: Path):
        """Invalid YAML falls back to defaults with an error."""
        (project_root / "codequeue.yml").write_text("provider: [unclosed")
        service = ConfigService(project_root)

        assert service.get_config().provider == "github"
        assert "Invalid YAML" in service.config_error

    def test_non_mapping(self, project_root: Path):
        """A list document is rejected."""
        (project_root / "codequeue.yml").write_text("- github\n")
        service = ConfigService(project_root)
        service.get_config()

        assert "mapping" in service.config_error

    def test_validation_error(self, project_root: Path):
        """Out-of-range values fall back to defaults with an error."""
        (project_root / "codequeue.yml").write_text("scanner:\n  snippet_line_count: 500\n")
        service = ConfigService(project_root)

        assert service.get_scanner_config().snippet_line_count == 5
        assert service.has_config_error

    def test_config_is_cached(self, project_root: Path):
        """Config is loaded once until reload."""
        service = ConfigService(project_root)
        first = service.get_config()
        (project_root / "codequeue.yml").write_text("provider: trello\n")

        assert service.get_config() is first
        service.reload()
        assert service.get_config().provider == "trello"


class TestConfigServiceUpdates:
    """Tests for ConfigService updates."""

    def test_set_provider(self, project_root: Path):
        """set_provider persists the choice."""
        service = ConfigService(project_root)
        service.set_provider("apple_reminders")

        assert service.get_config().provider == "apple_reminders"
        data = yaml.safe_load((project_root / "codequeue.yml").read_text())
        assert data["provider"] == "apple_reminders"

    def test_set_provider_setting(self, project_root: Path):
        """Provider settings are written into their section."""
        service = ConfigService(project_root)
        service.set_provider_setting("github", "project_id", "PVT_9")

        assert ConfigService(project_root).get_config().github.project_id == "PVT_9"

    def test_set_provider_setting_keeps_other_keys(self, project_root: Path):
        """Existing keys survive an update."""
        (project_root / "codequeue.yml").write_text(
            "body_template: custom\ntrello:\n  board_id: B\n"
        )
        service = ConfigService(project_root)
        service.set_provider_setting("trello", "default_list_id", "L")

        config = ConfigService(project_root).get_config()
        assert config.body_template == "custom"
        assert config.trello.board_id == "B"
        assert config.trello.default_list_id == "L"

    def test_unknown_provider_rejected(self, project_root: Path):
        """Unknown provider IDs raise ValueError."""
        service = ConfigService(project_root)
        with pytest.raises(ValueError, match="Unknown provider"):
            service.set_provider_setting("jira", "x", "y")
        assert not (project_root / "codequeue.yml").exists()

    def test_invalid_value_not_written(self, project_root: Path):
        """Invalid results raise ValueError and leave the file alone."""
        service = ConfigService(project_root)
        with pytest.raises(ValueError, match="Invalid configuration"):
            service.set_provider_setting("github", "status", {"field_id": ""})
        assert not (project_root / "codequeue.yml").exists()
