"""Data models."""

from .codequeue_config import (
    DEFAULT_BODY_TEMPLATE,
    AppleRemindersSettings,
    CodequeueConfig,
    FieldOptionSetting,
    GitHubSettings,
    PriorityFieldSetting,
    ScannerConfig,
    SingleSelectSetting,
    TrelloSettings,
)
from .provider_options import ProjectOption, StatusField, StatusOption
from .sync import PublishResult, ReconcileResult
from .task import DEFAULT_TAG, Task, TaskEntry

__all__ = [
    "DEFAULT_BODY_TEMPLATE",
    "DEFAULT_TAG",
    "AppleRemindersSettings",
    "CodequeueConfig",
    "FieldOptionSetting",
    "GitHubSettings",
    "PriorityFieldSetting",
    "ProjectOption",
    "PublishResult",
    "ReconcileResult",
    "ScannerConfig",
    "SingleSelectSetting",
    "StatusField",
    "StatusOption",
    "Task",
    "TaskEntry",
    "TrelloSettings",
]
