"""Reconciliation of scanned TODOs with the remote tracker.

One pass compares the tasks found in a document with the entries stored for
that document, keyed by content address:

1. Tasks whose hash has no stored entry are published in one concurrent
   batch. Each successful result is recorded; failures stay unrecorded and
   are retried on the next pass.
2. Stored entries whose hash no longer appears are archived one at a time
   and dropped from the state whether or not the archive call succeeded.
3. The state is written once, and only if something changed.

Load, compare and persist happen under the store lock, so concurrent passes
within one process serialize.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import ReconcileResult, Task, TaskEntry

if TYPE_CHECKING:
    from ..providers.protocol import TaskProvider
    from ..state.store import StateStoreProtocol

logger = logging.getLogger(__name__)


def diff_tasks(
    stored_file_tasks: list[TaskEntry],
    current_tasks: list[Task],
) -> tuple[list[Task], list[TaskEntry]]:
    """Compute additions and removals for one file.

    Args:
        stored_file_tasks: Stored entries of the file being reconciled
        current_tasks: Tasks found by the latest scan of that file

    Returns:
        (tasks to create, entries to archive). Tasks sharing a hash are
        created once; the first occurrence wins.
    """
    stored_hashes = {entry.hash for entry in stored_file_tasks}
    additions: list[Task] = []
    seen: set[str] = set()
    for task in current_tasks:
        if task.hash in stored_hashes or task.hash in seen:
            continue
        seen.add(task.hash)
        additions.append(task)

    current_hashes = {task.hash for task in current_tasks}
    removals = [entry for entry in stored_file_tasks if entry.hash not in current_hashes]
    return additions, removals


class Reconciler:
    """Converges a tracker with the TODOs of scanned documents."""

    def __init__(self, store: StateStoreProtocol, provider: TaskProvider) -> None:
        """Initialize the reconciler.

        Args:
            store: Persisted state (source of truth for what was published)
            provider: Active task tracker backend
        """
        self._store = store
        self._provider = provider

    def plan(self, file: str, current_tasks: list[Task]) -> tuple[list[Task], list[TaskEntry]]:
        """Preview a pass without remote calls or writes."""
        stored_file_tasks = [entry for entry in self._store.load() if entry.file == file]
        return diff_tasks(stored_file_tasks, current_tasks)

    def reconcile(self, file: str, current_tasks: list[Task]) -> ReconcileResult:
        """Run one reconciliation pass for a file.

        Args:
            file: Identifier of the scanned document
            current_tasks: Tasks extracted from its current content

        Returns:
            ReconcileResult describing created, failed and archived items
        """
        result = ReconcileResult(file=file)

        with self._store.lock():
            entries = self._store.load()
            stored_file_tasks = [entry for entry in entries if entry.file == file]

            if not self._provider_ready():
                logger.info(
                    "Skipping sync of %s: %s is not configured",
                    file,
                    self._provider.display_name,
                )
                result.not_configured = True
                return result

            additions, removals = diff_tasks(stored_file_tasks, current_tasks)

            if additions:
                self._create(file, additions, entries, result)
            for entry in removals:
                self._archive(file, entry, entries, result)

            if result.created or result.archived:
                self._store.save(entries)
                result.state_changed = True
                logger.info(
                    "State updated for %s: %d created, %d archived",
                    file,
                    result.created_count,
                    result.archived_count,
                )

        return result

    def _provider_ready(self) -> bool:
        try:
            return self._provider.validate_configuration()
        except Exception as e:
            logger.error("Failed to validate %s configuration: %s", self._provider.display_name, e)
            return False

    def _create(
        self,
        file: str,
        additions: list[Task],
        entries: list[TaskEntry],
        result: ReconcileResult,
    ) -> None:
        for task in additions:
            logger.info("New task detected: %r (%s:%d)", task.title, file, task.line)

        try:
            published = self._provider.publish_tasks(additions)
        except Exception as e:
            logger.error("Batch publish failed for %s: %s", file, e)
            published = []

        item_ids: dict[str, str] = {}
        for publish_result in published:
            if publish_result.item_id and publish_result.hash not in item_ids:
                item_ids[publish_result.hash] = publish_result.item_id

        for task in additions:
            item_id = item_ids.get(task.hash)
            if item_id is None:
                logger.warning(
                    "Failed to create item for %r (%s:%d), will retry on next scan",
                    task.title,
                    file,
                    task.line,
                )
                result.failed.append(task)
                continue

            entry = TaskEntry(hash=task.hash, item_id=item_id, file=file)
            entries.append(entry)
            result.created.append(entry)

    def _archive(
        self,
        file: str,
        entry: TaskEntry,
        entries: list[TaskEntry],
        result: ReconcileResult,
    ) -> None:
        logger.info("Task removed from %s, archiving %s", file, entry.item_id)
        try:
            self._provider.archive_task(entry.item_id)
        except Exception as e:
            error_msg = f"Failed to archive {entry.item_id}: {e}"
            result.archive_errors.append(error_msg)
            logger.error(error_msg)

        # Dropped even when archiving failed; the remote item is not retried
        entries.remove(entry)
        result.archived.append(entry.item_id)


def reconcile(
    file: str,
    current_tasks: list[Task],
    store: StateStoreProtocol,
    provider: TaskProvider,
) -> ReconcileResult:
    """Run one reconciliation pass (see Reconciler.reconcile)."""
    return Reconciler(store, provider).reconcile(file, current_tasks)
