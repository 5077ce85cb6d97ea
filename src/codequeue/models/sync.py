"""Result models for publishing and reconciliation."""

from dataclasses import dataclass, field

from pydantic import BaseModel

from .task import Task, TaskEntry


class PublishResult(BaseModel):
    """Outcome of publishing one task, keyed by the task's content address."""

    hash: str
    item_id: str | None = None  # None means this creation failed

    @property
    def succeeded(self) -> bool:
        """Whether the provider created an item."""
        return self.item_id is not None


@dataclass
class ReconcileResult:
    """Result of one reconciliation pass over a file."""

    file: str
    created: list[TaskEntry] = field(default_factory=list)  # New entries recorded
    failed: list[Task] = field(default_factory=list)  # Creations to retry next pass
    archived: list[str] = field(default_factory=list)  # Item IDs removed from state
    archive_errors: list[str] = field(default_factory=list)  # Error messages
    not_configured: bool = False  # Provider unavailable, nothing attempted
    state_changed: bool = False  # Whether the store was written

    @property
    def created_count(self) -> int:
        """Number of items created."""
        return len(self.created)

    @property
    def archived_count(self) -> int:
        """Number of stored entries archived."""
        return len(self.archived)

    @property
    def has_errors(self) -> bool:
        """Whether any creation or archive failed."""
        return bool(self.failed) or bool(self.archive_errors)

    @property
    def is_noop(self) -> bool:
        """Whether the pass changed nothing and reported nothing."""
        return not self.state_changed and not self.has_errors
