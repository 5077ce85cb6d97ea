"""Configuration models for codequeue.yml."""

from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_BODY_TEMPLATE = "From TODO in ${file}:${line}\n\n```${lang}\n${code_snippet}\n```"


class ScannerConfig(BaseModel):
    """Settings for TODO extraction."""

    snippet_extraction_enabled: bool = True
    snippet_line_count: int = Field(default=5, ge=0, le=50)
    auto_scan_on_save: bool = True


class SingleSelectSetting(BaseModel):
    """A chosen option of a GitHub single-select field (e.g. Status: "Todo")."""

    field_id: str = Field(..., min_length=1)
    option_id: str = Field(..., min_length=1)
    name: str = ""


class FieldOptionSetting(BaseModel):
    """One option of a GitHub single-select field."""

    id: str
    name: str


class PriorityFieldSetting(BaseModel):
    """GitHub Priority field; TODO tags are matched against option names."""

    field_id: str = Field(..., min_length=1)
    options: list[FieldOptionSetting] = Field(default_factory=list)

    def option_for_tag(self, tag: str) -> FieldOptionSetting | None:
        """Get the option whose name matches the tag, case-insensitively."""
        wanted = tag.lower()
        for option in self.options:
            if option.name.lower() == wanted:
                return option
        return None


class GitHubSettings(BaseModel):
    """Provider settings for GitHub Projects (v2)."""

    project_id: str | None = None  # "PVT_..." node ID
    status: SingleSelectSetting | None = None  # Default column for new items
    priority: PriorityFieldSetting | None = None


class TrelloSettings(BaseModel):
    """Provider settings for Trello."""

    api_key: str | None = None
    board_id: str | None = None
    default_list_id: str | None = None


class AppleRemindersSettings(BaseModel):
    """Provider settings for Apple Reminders."""

    list_name: str | None = None


class CodequeueConfig(BaseModel):
    """Root configuration from codequeue.yml."""

    version: int = 1
    provider: str = Field(
        default="github",
        description="Task provider: github, trello, apple_reminders",
    )
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    body_template: str = DEFAULT_BODY_TEMPLATE
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    trello: TrelloSettings = Field(default_factory=TrelloSettings)
    apple_reminders: AppleRemindersSettings = Field(default_factory=AppleRemindersSettings)

    PROVIDER_SECTIONS: ClassVar[tuple[str, ...]] = ("github", "trello", "apple_reminders")

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_keys(cls, data: Any) -> Any:
        """Move pre-provider flat keys into their provider sections.

        Older configs kept GitHub and Reminders settings at the top level. A
        legacy value is only used when the new key is not set.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)

        github = dict(data.get("github") or {})
        project_id = data.pop("project_id", None)
        if project_id and not github.get("project_id"):
            github["project_id"] = project_id
        status = data.pop("status_settings", None)
        if isinstance(status, dict) and not github.get("status"):
            github["status"] = {
                "field_id": status.get("field_id", status.get("fieldId")),
                "option_id": status.get("option_id", status.get("optionId")),
                "name": status.get("name", ""),
            }
        if github:
            data["github"] = github

        list_name = data.pop("apple_reminders_list", None)
        reminders = dict(data.get("apple_reminders") or {})
        if list_name and not reminders.get("list_name"):
            reminders["list_name"] = list_name
        if reminders:
            data["apple_reminders"] = reminders

        return data

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        """Provider IDs are compared lowercase."""
        return v.strip().lower()

    def provider_settings(self, provider_id: str) -> BaseModel:
        """Get the settings section for a provider ID."""
        if provider_id not in self.PROVIDER_SECTIONS:
            raise ValueError(
                f"Unknown provider '{provider_id}'. "
                f"Must be one of: {', '.join(self.PROVIDER_SECTIONS)}"
            )
        return getattr(self, provider_id)

    @classmethod
    def default(cls) -> "CodequeueConfig":
        """Return default configuration."""
        return cls()
