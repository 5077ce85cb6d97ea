"""Provider configuration commands."""

import logging
from pathlib import Path

from ..providers import GitHubProvider, ProviderFactory
from ..services import ConfigService
from .output import error, header, info, success

logger = logging.getLogger(__name__)


def run_providers(project_root: Path) -> int:
    """List providers, marking the active one and whether it is configured."""
    config_service = ConfigService(project_root)
    factory = ProviderFactory(config_service)
    active = factory.get_provider()

    header("Providers:")
    for provider in factory.get_all_providers():
        marker = "*" if provider.id == active.id else " "
        auth = "no authentication"
        if provider.requires_authentication:
            auth = "requires authentication"
        print(f"  {marker} {provider.id:<16} {provider.display_name} ({auth})")

    if active.validate_configuration():
        success(f"{active.display_name} is configured")
    else:
        info(f"{active.display_name} is not configured yet")
    return 0


def run_use(project_root: Path, provider_id: str) -> int:
    """Select the active provider."""
    config_service = ConfigService(project_root)
    factory = ProviderFactory(config_service)
    provider = factory.get_provider_by_id(provider_id)
    if provider is None:
        known = ", ".join(p.id for p in factory.get_all_providers())
        error(f"Unknown provider '{provider_id}'. Choose one of: {known}")
        return 1

    try:
        config_service.set_provider(provider_id)
    except ValueError as e:
        error(str(e))
        return 1
    success(f"Switched to {provider.display_name}")
    if not provider.validate_configuration():
        info(f"Configure {provider.display_name} with 'codequeue projects' and 'codequeue set'")
    return 0


def run_projects(project_root: Path) -> int:
    """List the projects/boards/lists of the active provider."""
    provider = ProviderFactory(ConfigService(project_root)).get_provider()

    if provider.requires_authentication and not provider.authenticate():
        error(f"Authentication required for {provider.display_name}. Set credentials first.")
        return 1

    projects = provider.get_projects()
    if not projects:
        info(f"No projects found for {provider.display_name}")
        return 0

    header(f"{provider.display_name} projects:")
    for project in projects:
        detail = f"  ({project.detail})" if project.detail else ""
        print(f"  {project.id}  {project.label}{detail}")
    return 0


def run_statuses(project_root: Path) -> int:
    """List the statuses/columns new items can be placed in."""
    provider = ProviderFactory(ConfigService(project_root)).get_provider()
    statuses = provider.get_statuses()
    if not statuses:
        info(f"No statuses available for {provider.display_name}")
        return 0

    header(f"{provider.display_name} statuses:")
    for status in statuses:
        parent = f"  (field/board {status.parent_id})" if status.parent_id else ""
        print(f"  {status.id}  {status.name}{parent}")
    return 0


def run_set(project_root: Path, provider_id: str, key: str, value: str) -> int:
    """Set a scalar provider setting such as github.project_id."""
    config_service = ConfigService(project_root)
    try:
        config_service.set_provider_setting(provider_id, key, value)
    except ValueError as e:
        error(str(e))
        return 1
    success(f"Set {provider_id}.{key}")
    return 0


def run_set_status(project_root: Path, status_name: str) -> int:
    """Choose the GitHub Status column new items are placed in."""
    config_service = ConfigService(project_root)
    provider = ProviderFactory(config_service).get_provider_by_id("github")
    if provider is None:
        error("GitHub provider unavailable")
        return 1

    for status in provider.get_statuses():
        if status.name.lower() == status_name.strip().lower():
            try:
                config_service.set_provider_setting(
                    "github",
                    "status",
                    {"field_id": status.parent_id, "option_id": status.id, "name": status.name},
                )
            except ValueError as e:
                error(str(e))
                return 1
            success(f"New items will be placed in '{status.name}'")
            return 0

    error(f"No status named '{status_name}' in the configured project")
    return 1


def run_sync_priorities(project_root: Path) -> int:
    """Store the GitHub Priority field so TODO tags can set priorities."""
    config_service = ConfigService(project_root)
    provider = ProviderFactory(config_service).get_provider_by_id("github")
    if not isinstance(provider, GitHubProvider):
        error("GitHub provider unavailable")
        return 1

    field = provider.get_priorities()
    if field is None:
        error("The configured project has no 'Priority' field")
        return 1

    try:
        config_service.set_provider_setting(
            "github",
            "priority",
            {
                "field_id": field.field_id,
                "options": [{"id": o.id, "name": o.name} for o in field.options],
            },
        )
    except ValueError as e:
        error(str(e))
        return 1
    names = ", ".join(o.name for o in field.options)
    success(f"Priority options saved: {names}")
    return 0
