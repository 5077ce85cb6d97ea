"""Provider protocol for task tracker backends."""

from typing import Protocol

from ..models import ProjectOption, PublishResult, StatusOption, Task


class TaskProvider(Protocol):
    """Interface for task tracker backends.

    This protocol defines the contract that all provider implementations
    must follow. Implementations include:
    - GitHub Projects (GraphQL draft issues)
    - Trello (REST cards)
    - Apple Reminders (local AppleScript)

    Item IDs are opaque strings chosen by the backend (e.g. "PVTI_..." for
    GitHub project items, a card ID for Trello).
    """

    id: str  # e.g. "github"
    display_name: str  # e.g. "GitHub Projects"
    requires_authentication: bool

    def authenticate(self) -> bool:
        """Check that the stored credentials are accepted by the backend.

        Returns:
            True if the backend accepted the credentials.
        """
        ...

    def validate_configuration(self) -> bool:
        """Check that all settings required to publish are present.

        Returns:
            True if the provider can publish without further setup.
        """
        ...

    def get_projects(self) -> list[ProjectOption]:
        """Get available projects/boards/lists."""
        ...

    def get_statuses(self) -> list[StatusOption]:
        """Get available statuses/columns for new items."""
        ...

    def publish_task(self, task: Task) -> str | None:
        """Create a remote item for a task.

        Returns:
            The created item ID, or None if creation failed.
        """
        ...

    def publish_tasks(self, tasks: list[Task]) -> list[PublishResult]:
        """Create remote items for several tasks concurrently.

        Equivalent to calling publish_task for each task. Partial success is
        expected: each result pairs a task hash with its item ID or None.
        """
        ...

    def archive_task(self, item_id: str) -> None:
        """Archive a remote item.

        Note:
            Failures (including unknown item IDs) are logged, never raised.
        """
        ...
