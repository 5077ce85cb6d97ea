"""Task domain models."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from ..utils.hashing import hash_task

DEFAULT_TAG = "general"


class Task(BaseModel):
    """A single TODO marker found in a scanned document.

    Tasks are recomputed on every scan. Identity lives in ``hash`` which only
    depends on file, tag and title, so a task survives moving around the file.
    """

    file: str  # Stable document identifier (absolute path for scanned files)
    line: int = Field(..., ge=1)  # 1-based line of the marker
    tag: str = DEFAULT_TAG  # e.g. "bug" for "TODO(bug): ..."
    title: str
    snippet: str = ""  # Code context captured after the marker
    hash: str = ""  # Content address, computed when not given

    @model_validator(mode="after")
    def _fill_identity(self) -> "Task":
        self.tag = self.tag.strip() or DEFAULT_TAG
        if not self.hash:
            self.hash = hash_task(self.file, self.tag, self.title)
        return self

    @property
    def language(self) -> str:
        """File extension without dot, used for code fences."""
        return Path(self.file).suffix.lstrip(".")


class TaskEntry(BaseModel):
    """Persisted record: content address ``hash`` is tracked remotely as ``item_id``."""

    hash: str = Field(..., min_length=1)
    item_id: str = Field(..., min_length=1)
    file: str = Field(..., min_length=1)

    def to_dict(self) -> dict[str, str]:
        """Convert to dict suitable for YAML state storage."""
        return {"hash": self.hash, "item_id": self.item_id, "file": self.file}

    @classmethod
    def from_raw(cls, raw: Any) -> "TaskEntry | None":
        """Build an entry from stored data, or None if the record is unusable.

        Accepts the older camelCase ``itemId`` key. Anything that is not a
        mapping or lacks one of the required fields is dropped.
        """
        if not isinstance(raw, dict):
            return None
        item_id = raw.get("item_id", raw.get("itemId"))
        hash_value = raw.get("hash")
        file = raw.get("file")
        if not all(isinstance(v, str) and v for v in (item_id, hash_value, file)):
            return None
        return cls(hash=hash_value, item_id=item_id, file=file)
