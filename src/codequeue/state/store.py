"""Persisted task state: which content addresses are already tracked remotely."""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, Protocol

import yaml

from ..models import TaskEntry

logger = logging.getLogger(__name__)

STATE_KEY = "codequeue.tasks"

# Process-wide; held across load-compare-persist of a reconciliation pass
_STATE_LOCK = threading.RLock()


class StateStoreProtocol(Protocol):
    """Interface of the persisted task entry store."""

    def lock(self) -> AbstractContextManager[Any]:
        """Lock held across a load-modify-save cycle."""
        ...

    def load(self) -> list[TaskEntry]:
        """Load all valid entries."""
        ...

    def save(self, entries: list[TaskEntry]) -> None:
        """Replace all entries."""
        ...


def parse_entries(raw: Any) -> list[TaskEntry]:
    """Convert stored data into entries, dropping unusable records."""
    if not isinstance(raw, list):
        return []
    entries: list[TaskEntry] = []
    for item in raw:
        entry = TaskEntry.from_raw(item)
        if entry is None:
            logger.debug("Dropping invalid state entry: %r", item)
            continue
        entries.append(entry)
    return entries


class StateStore:
    """
    YAML-backed key-value slot holding the flat list of TaskEntry records.

    The whole sequence is read and written at once. Other keys in the same
    document are preserved on save.
    """

    def __init__(self, path: Path, key: str = STATE_KEY) -> None:
        """
        Initialize the store.

        Args:
            path: YAML file holding the state (created on first save)
            key: Top-level key of the task entry list
        """
        self.path = path
        self.key = key

    def lock(self) -> AbstractContextManager[Any]:
        """Process-wide lock guarding a load-modify-save cycle."""
        return _STATE_LOCK

    def load(self) -> list[TaskEntry]:
        """Load all entries. Missing or unreadable state yields an empty list."""
        return parse_entries(self._read_document().get(self.key))

    def entries_for(self, file: str) -> list[TaskEntry]:
        """Load entries originating from one file."""
        return [entry for entry in self.load() if entry.file == file]

    def save(self, entries: list[TaskEntry]) -> None:
        """Replace the stored entries with ``entries``."""
        document = self._read_document()
        document[self.key] = [entry.to_dict() for entry in entries]

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w") as f:
                yaml.safe_dump(document, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved %d state entries to %s", len(entries), self.path)

    def _read_document(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open() as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to read state file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return data


class MemoryStateStore:
    """In-memory store with the same interface as StateStore."""

    def __init__(self, entries: list[Any] | None = None) -> None:
        self._raw: list[Any] = list(entries or [])
        self.save_count = 0

    def lock(self) -> AbstractContextManager[Any]:
        return _STATE_LOCK

    def load(self) -> list[TaskEntry]:
        return parse_entries(self._raw)

    def entries_for(self, file: str) -> list[TaskEntry]:
        return [entry for entry in self.load() if entry.file == file]

    def save(self, entries: list[TaskEntry]) -> None:
        self._raw = [entry.to_dict() for entry in entries]
        self.save_count += 1
