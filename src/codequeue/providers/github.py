"""GitHub Projects provider: TODOs become draft issues on a ProjectV2 board."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from ..github import GitHubClient, GitHubClientError, resolve_token
from ..github.queries import (
    ADD_DRAFT_ISSUE,
    ARCHIVE_ITEM,
    GET_PROJECT_FIELDS,
    GET_VIEWER,
    GET_VIEWER_PROJECTS,
    UPDATE_ITEM_FIELD,
)
from ..models import (
    DEFAULT_TAG,
    GitHubSettings,
    ProjectOption,
    PublishResult,
    StatusField,
    StatusOption,
    Task,
)
from .common import (
    UNKNOWN_AUTHOR,
    blame_author,
    publish_concurrently,
    render_body,
    validate_task_title,
)

if TYPE_CHECKING:
    from ..services.config_service import ConfigService

logger = logging.getLogger(__name__)

STATUS_FIELD = "Status"
PRIORITY_FIELD = "Priority"


class GitHubProvider:
    """Publishes TODOs as draft issues to a GitHub ProjectV2 board.

    New items optionally get a default Status column, and a Priority option
    when the TODO tag names one (e.g. ``TODO(high): ...``).
    """

    id = "github"
    display_name = "GitHub Projects"
    requires_authentication = True

    def __init__(self, config_service: ConfigService, client: GitHubClient | None = None) -> None:
        """Initialize the provider.

        Args:
            config_service: Configuration service for GitHub settings
            client: Pre-built client; by default one is created lazily from
                GITHUB_TOKEN or the gh CLI
        """
        self._config_service = config_service
        self._client = client
        self._client_lock = threading.Lock()

    def _get_settings(self) -> GitHubSettings:
        return self._config_service.get_config().github

    def _ensure_client(self) -> GitHubClient | None:
        with self._client_lock:
            if self._client is None:
                token = resolve_token()
                if not token:
                    return None
                self._client = GitHubClient(token)
            return self._client

    # --- Setup ---

    def authenticate(self) -> bool:
        client = self._ensure_client()
        if client is None:
            return False
        try:
            result = client.query(GET_VIEWER)
        except GitHubClientError as e:
            logger.error("GitHub authentication failed: %s", e)
            return False
        login = result.get("viewer", {}).get("login")
        logger.debug("Authenticated to GitHub as %s", login)
        return bool(login)

    def validate_configuration(self) -> bool:
        if not self._get_settings().project_id:
            return False
        return self._client is not None or resolve_token() is not None

    def get_projects(self) -> list[ProjectOption]:
        """List the viewer's projects and those of their organizations."""
        client = self._ensure_client()
        if client is None:
            return []

        try:
            result = client.query(GET_VIEWER_PROJECTS)
        except GitHubClientError as e:
            logger.error("Failed to fetch projects: %s", e)
            return []

        viewer = result.get("viewer") or {}
        projects = [
            ProjectOption(id=p["id"], label=p["title"], detail=f"User: {viewer.get('login', '')}")
            for p in (viewer.get("projectsV2") or {}).get("nodes") or []
        ]
        for org in (viewer.get("organizations") or {}).get("nodes") or []:
            for p in (org.get("projectsV2") or {}).get("nodes") or []:
                projects.append(
                    ProjectOption(id=p["id"], label=p["title"], detail=f"Org: {org['login']}")
                )
        return projects

    def get_statuses(self) -> list[StatusOption]:
        field = self._fetch_single_select_field(STATUS_FIELD)
        return field.options if field else []

    def get_priorities(self) -> StatusField | None:
        """Get the project's Priority field, if it has one."""
        return self._fetch_single_select_field(PRIORITY_FIELD)

    def _fetch_single_select_field(self, name: str) -> StatusField | None:
        client = self._ensure_client()
        project_id = self._get_settings().project_id
        if client is None or not project_id:
            return None

        try:
            result = client.query(GET_PROJECT_FIELDS, {"id": project_id})
        except GitHubClientError as e:
            logger.error("Failed to fetch %s field: %s", name, e)
            return None

        fields = ((result.get("node") or {}).get("fields") or {}).get("nodes") or []
        for field in fields:
            if field.get("name") == name:
                return StatusField(
                    field_id=field["id"],
                    options=[
                        StatusOption(id=opt["id"], name=opt["name"], parent_id=field["id"])
                        for opt in field.get("options", [])
                    ],
                )
        return None

    # --- Items ---

    def publish_tasks(self, tasks: list[Task]) -> list[PublishResult]:
        return publish_concurrently(self.publish_task, tasks)

    def publish_task(self, task: Task) -> str | None:
        client = self._ensure_client()
        settings = self._get_settings()
        if client is None or not settings.project_id:
            logger.error("Cannot publish: missing GitHub token or project ID")
            return None

        config = self._config_service.get_config()
        try:
            title = validate_task_title(task.title)
            author = UNKNOWN_AUTHOR
            if "${author}" in config.body_template:
                author = blame_author(task.file, task.line)
            root = self._config_service.project_root
            body = render_body(config.body_template, task, root, author)

            result = client.mutate(
                ADD_DRAFT_ISSUE,
                {"project": settings.project_id, "title": title, "body": body},
            )
            item_id = result["addProjectV2DraftIssue"]["projectItem"]["id"]
        except (GitHubClientError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to publish task %r: %s", task.title, e)
            return None

        logger.info("Published task %r as project item %s", task.title, item_id)
        self._apply_default_fields(client, settings, item_id, task)
        return item_id

    def _apply_default_fields(
        self, client: GitHubClient, settings: GitHubSettings, item_id: str, task: Task
    ) -> None:
        if settings.status:
            logger.debug("Setting status of %s to %r", item_id, settings.status.name)
            self._update_item_field(
                client, settings, item_id, settings.status.field_id, settings.status.option_id
            )

        if settings.priority and task.tag != DEFAULT_TAG:
            option = settings.priority.option_for_tag(task.tag)
            if option:
                logger.debug("Setting priority of %s to %r", item_id, option.name)
                self._update_item_field(
                    client, settings, item_id, settings.priority.field_id, option.id
                )

    def _update_item_field(
        self,
        client: GitHubClient,
        settings: GitHubSettings,
        item_id: str,
        field_id: str,
        option_id: str,
    ) -> None:
        variables: dict[str, Any] = {
            "project": settings.project_id,
            "itemId": item_id,
            "fieldId": field_id,
            "optionId": option_id,
        }
        try:
            client.mutate(UPDATE_ITEM_FIELD, variables)
        except GitHubClientError as e:
            # Field failures leave the created item in place
            logger.error("Failed to update field %s on %s: %s", field_id, item_id, e)

    def archive_task(self, item_id: str) -> None:
        client = self._ensure_client()
        project_id = self._get_settings().project_id
        if client is None or not project_id:
            logger.error("Cannot archive %s: missing GitHub token or project ID", item_id)
            return

        try:
            client.mutate(ARCHIVE_ITEM, {"project": project_id, "itemId": item_id})
        except GitHubClientError as e:
            logger.error("Failed to archive project item %s: %s", item_id, e)
            return
        logger.info("Archived project item %s", item_id)
