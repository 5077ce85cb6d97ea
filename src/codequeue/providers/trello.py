"""Trello provider: TODOs become cards in a board list."""

from __future__ import annotations

import logging
import os
import threading
from typing import TYPE_CHECKING, Any

import httpx

from ..models import ProjectOption, PublishResult, StatusOption, Task, TrelloSettings
from .common import publish_concurrently, relative_path, validate_task_title

if TYPE_CHECKING:
    from ..services.config_service import ConfigService

logger = logging.getLogger(__name__)

TRELLO_API_URL = "https://api.trello.com/1"
TOKEN_ENV = "TRELLO_TOKEN"
DEFAULT_TIMEOUT = 30.0


class TrelloClientError(Exception):
    """Trello API request failed."""

    pass


class TrelloClient:
    """Minimal Trello REST client authenticating with key and token parameters."""

    def __init__(
        self,
        api_key: str,
        token: str,
        base_url: str = TRELLO_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._auth = {"key": api_key, "token": token}
        self._client = httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def request(self, method: str, path: str, params: dict[str, str] | None = None) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            TrelloClientError: On transport errors, timeouts and HTTP errors
        """
        try:
            response = self._client.request(method, path, params={**self._auth, **(params or {})})
        except httpx.RequestError as e:
            raise TrelloClientError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            raise TrelloClientError(f"HTTP {response.status_code}: {response.text}")

        try:
            return response.json()
        except ValueError as e:
            raise TrelloClientError(f"Invalid JSON response: {e}") from e


class TrelloProvider:
    """Publishes TODOs as cards on top of a configured Trello list."""

    id = "trello"
    display_name = "Trello"
    requires_authentication = True

    def __init__(self, config_service: ConfigService, client: TrelloClient | None = None) -> None:
        """Initialize the provider.

        Args:
            config_service: Configuration service (api_key, board and list IDs)
            client: Pre-built client; by default one is created from the
                configured api_key and the TRELLO_TOKEN environment variable
        """
        self._config_service = config_service
        self._client = client
        self._client_lock = threading.Lock()

    def _get_settings(self) -> TrelloSettings:
        return self._config_service.get_config().trello

    def _ensure_client(self) -> TrelloClient | None:
        with self._client_lock:
            if self._client is None:
                api_key = self._get_settings().api_key
                token = os.environ.get(TOKEN_ENV)
                if not api_key or not token:
                    return None
                self._client = TrelloClient(api_key, token)
            return self._client

    # --- Setup ---

    def authenticate(self) -> bool:
        client = self._ensure_client()
        if client is None:
            return False
        try:
            client.request("GET", "/members/me")
        except TrelloClientError as e:
            logger.error("Trello authentication failed: %s", e)
            return False
        return True

    def validate_configuration(self) -> bool:
        settings = self._get_settings()
        if not settings.board_id or not settings.default_list_id:
            return False
        return self._ensure_client() is not None

    def get_projects(self) -> list[ProjectOption]:
        client = self._ensure_client()
        if client is None:
            return []
        try:
            boards = client.request("GET", "/members/me/boards")
        except TrelloClientError as e:
            logger.error("Failed to fetch Trello boards: %s", e)
            return []
        return [ProjectOption(id=b["id"], label=b["name"], detail="Trello Board") for b in boards]

    def get_statuses(self) -> list[StatusOption]:
        client = self._ensure_client()
        board_id = self._get_settings().board_id
        if client is None or not board_id:
            return []
        try:
            lists = client.request("GET", f"/boards/{board_id}/lists")
        except TrelloClientError as e:
            logger.error("Failed to fetch Trello lists: %s", e)
            return []
        return [StatusOption(id=lst["id"], name=lst["name"], parent_id=board_id) for lst in lists]

    # --- Cards ---

    def publish_tasks(self, tasks: list[Task]) -> list[PublishResult]:
        return publish_concurrently(self.publish_task, tasks)

    def publish_task(self, task: Task) -> str | None:
        client = self._ensure_client()
        list_id = self._get_settings().default_list_id
        if client is None or not list_id:
            logger.error("Cannot publish: missing Trello credentials or default list")
            return None

        try:
            title = validate_task_title(task.title)
            card = client.request(
                "POST",
                "/cards",
                {
                    "idList": list_id,
                    "name": title,
                    "desc": self._describe(task),
                    "pos": "top",
                },
            )
            card_id = card["id"]
        except (TrelloClientError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to publish task %r to Trello: %s", task.title, e)
            return None

        logger.info("Published task %r as Trello card %s", task.title, card_id)
        return card_id

    def _describe(self, task: Task) -> str:
        location = relative_path(task.file, self._config_service.project_root)
        return f"File: {location}\nLine: {task.line}\n\n{task.snippet or 'No snippet'}"

    def archive_task(self, item_id: str) -> None:
        client = self._ensure_client()
        if client is None:
            logger.error("Cannot archive %s: missing Trello credentials", item_id)
            return
        try:
            client.request("PUT", f"/cards/{item_id}", {"closed": "true"})
        except TrelloClientError as e:
            logger.error("Failed to archive Trello card %s: %s", item_id, e)
            return
        logger.info("Archived Trello card %s", item_id)
