"""Provider selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .apple_reminders import AppleRemindersProvider
from .github import GitHubProvider
from .protocol import TaskProvider
from .trello import TrelloProvider

if TYPE_CHECKING:
    from ..services.config_service import ConfigService

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "github"


@dataclass
class ProviderInfo:
    """Summary of a provider for listings."""

    id: str
    display_name: str
    requires_authentication: bool


class ProviderFactory:
    """Builds every known provider once and hands out the configured one."""

    def __init__(self, config_service: ConfigService) -> None:
        self._config_service = config_service
        self._default: TaskProvider = GitHubProvider(config_service)
        self._providers: list[TaskProvider] = [
            self._default,
            AppleRemindersProvider(config_service),
            TrelloProvider(config_service),
        ]

    def get_provider(self) -> TaskProvider:
        """Get the provider selected in codequeue.yml, falling back to GitHub."""
        provider_id = self._config_service.get_config().provider
        provider = self.get_provider_by_id(provider_id)
        if provider is None:
            logger.warning("Unknown provider '%s', using %s", provider_id, DEFAULT_PROVIDER)
            return self._default
        return provider

    def get_provider_by_id(self, provider_id: str) -> TaskProvider | None:
        """Get a provider by ID."""
        for provider in self._providers:
            if provider.id == provider_id:
                return provider
        return None

    def get_all_providers(self) -> list[TaskProvider]:
        """Get all providers."""
        return list(self._providers)

    def available_providers(self) -> list[ProviderInfo]:
        """Describe all providers."""
        return [
            ProviderInfo(
                id=p.id,
                display_name=p.display_name,
                requires_authentication=p.requires_authentication,
            )
            for p in self._providers
        ]
