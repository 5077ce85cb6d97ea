"""Content addressing for TODO tasks."""

import hashlib

# Separator between identity fields so "ab"+"c" and "a"+"bc" differ
_FIELD_SEPARATOR = "\0"


def hash_task(file: str, tag: str, title: str) -> str:
    """
    Compute the content address of a task.

    The line number and snippet are not part of the address, so
    a TODO keeps its identity when code above it is added or removed.

    Example: hash_task("src/app.py", "bug", "fix race") -> "3f1c..."
    """
    payload = _FIELD_SEPARATOR.join((file, tag, title))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
