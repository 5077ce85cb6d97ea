"""Tests for codequeue.yml configuration models."""

import pytest
from pydantic import ValidationError

from codequeue.models import (
    DEFAULT_BODY_TEMPLATE,
    CodequeueConfig,
    FieldOptionSetting,
    PriorityFieldSetting,
    ScannerConfig,
)


class TestDefaults:
    """Tests for default configuration."""

    def test_default_values(self):
        """Defaults select GitHub with snippets enabled."""
        config = CodequeueConfig.default()
        assert config.version == 1
        assert config.provider == "github"
        assert config.scanner.snippet_extraction_enabled
        assert config.scanner.snippet_line_count == 5
        assert config.scanner.auto_scan_on_save
        assert config.body_template == DEFAULT_BODY_TEMPLATE
        assert config.github.project_id is None
        assert config.trello.board_id is None
        assert config.apple_reminders.list_name is None

    @pytest.mark.parametrize("count", [-1, 51])
    def test_snippet_line_count_bounds(self, count):
        """Snippet line count is limited to 0-50."""
        with pytest.raises(ValidationError):
            ScannerConfig(snippet_line_count=count)

    def test_provider_normalized(self):
        """Provider IDs are lowercased and trimmed."""
        assert CodequeueConfig(provider=" Trello ").provider == "trello"


class TestLegacyMigration:
    """Tests for migration of flat pre-provider keys."""

    def test_project_id_moved(self):
        """Top-level project_id becomes github.project_id."""
        config = CodequeueConfig(**{"project_id": "PVT_1"})
        assert config.github.project_id == "PVT_1"

    def test_status_settings_moved(self):
        """Top-level status_settings becomes github.status."""
        config = CodequeueConfig(
            **{"status_settings": {"field_id": "F", "option_id": "O", "name": "Todo"}}
        )
        assert config.github.status.option_id == "O"
        assert config.github.status.name == "Todo"

    def test_camel_case_status_settings(self):
        """status_settings written as fieldId/optionId are converted."""
        config = CodequeueConfig(
            **{
                "provider": "apple_reminders",
                "apple_reminders_list": "Work",
                "project_id": "PVT_1",
                "status_settings": {"fieldId": "F", "optionId": "O", "name": "Todo"},
            }
        )
        assert config.provider == "apple_reminders"
        assert config.apple_reminders.list_name == "Work"
        assert config.github.project_id == "PVT_1"
        assert config.github.status.field_id == "F"
        assert config.github.status.option_id == "O"

    def test_reminders_list_moved(self):
        """Top-level apple_reminders_list becomes apple_reminders.list_name."""
        config = CodequeueConfig(**{"apple_reminders_list": "Work"})
        assert config.apple_reminders.list_name == "Work"

    def test_new_keys_win(self):
        """Legacy values do not override provider sections."""
        config = CodequeueConfig(
            **{"project_id": "PVT_old", "github": {"project_id": "PVT_new"}}
        )
        assert config.github.project_id == "PVT_new"


class TestProviderSettings:
    """Tests for CodequeueConfig.provider_settings."""

    def test_known_provider(self):
        """Known IDs return their section."""
        config = CodequeueConfig(trello={"board_id": "B"})
        assert config.provider_settings("trello").board_id == "B"

    def test_unknown_provider(self):
        """Unknown IDs raise ValueError."""
        with pytest.raises(ValueError, match="Unknown provider"):
            CodequeueConfig().provider_settings("jira")


class TestPriorityField:
    """Tests for PriorityFieldSetting."""

    def test_option_for_tag(self):
        """Tags match option names case-insensitively."""
        field = PriorityFieldSetting(
            field_id="F",
            options=[
                FieldOptionSetting(id="1", name="High"),
                FieldOptionSetting(id="2", name="Low"),
            ],
        )
        assert field.option_for_tag("high").id == "1"
        assert field.option_for_tag("bug") is None
