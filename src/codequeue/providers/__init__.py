"""Task tracker providers."""

from .apple_reminders import AppleRemindersProvider, AppleScriptError
from .factory import ProviderFactory, ProviderInfo
from .github import GitHubProvider
from .protocol import TaskProvider
from .trello import TrelloClient, TrelloClientError, TrelloProvider

__all__ = [
    "AppleRemindersProvider",
    "AppleScriptError",
    "GitHubProvider",
    "ProviderFactory",
    "ProviderInfo",
    "TaskProvider",
    "TrelloClient",
    "TrelloClientError",
    "TrelloProvider",
]
