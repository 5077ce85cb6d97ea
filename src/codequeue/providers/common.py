"""Helpers shared by provider implementations."""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from string import Template

from ..models import PublishResult, Task

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 256
DEFAULT_MAX_WORKERS = 8
BLAME_TIMEOUT = 5.0
UNKNOWN_AUTHOR = "Unknown"
NO_SNIPPET = "// No code context available"


def validate_task_title(title: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    """Trim a title and bound its length.

    Raises:
        ValueError: If the title is empty after trimming
    """
    sanitized = title.strip()
    if not sanitized:
        raise ValueError("Task title cannot be empty")
    if len(sanitized) > max_length:
        logger.info("Task title truncated from %d to %d characters", len(sanitized), max_length)
        return sanitized[:max_length]
    return sanitized


def publish_concurrently(
    publish: Callable[[Task], str | None],
    tasks: list[Task],
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[PublishResult]:
    """Run ``publish`` for every task in parallel and key the results by hash.

    A publish call that raises counts as a failed creation for that task only.
    """
    if not tasks:
        return []

    def run(task: Task) -> PublishResult:
        try:
            item_id = publish(task)
        except Exception as e:
            logger.error("Failed to publish task %r: %s", task.title, e)
            item_id = None
        return PublishResult(hash=task.hash, item_id=item_id)

    workers = max(1, min(max_workers, len(tasks)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="codequeue-publish") as pool:
        return list(pool.map(run, tasks))


def relative_path(file: str, root: Path | None) -> str:
    """Display path of a file relative to the project root when possible."""
    if root is None:
        return file
    try:
        return Path(file).resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return file


def blame_author(file: str, line: int) -> str:
    """Get the author of a line from ``git blame``, or "Unknown"."""
    path = Path(file)
    try:
        result = subprocess.run(
            ["git", "blame", "-L", f"{line},{line}", "--porcelain", path.name],
            cwd=path.parent,
            capture_output=True,
            text=True,
            check=True,
            timeout=BLAME_TIMEOUT,
        )
    except (subprocess.SubprocessError, OSError) as e:
        logger.debug("git blame unavailable for %s:%d: %s", file, line, e)
        return UNKNOWN_AUTHOR

    match = re.search(r"^author (.+)$", result.stdout, re.MULTILINE)
    return match.group(1) if match else UNKNOWN_AUTHOR


def render_body(template: str, task: Task, root: Path | None, author: str) -> str:
    """Fill a body template.

    Supported placeholders: ${file}, ${line}, ${code_snippet}, ${lang},
    ${author}. Literal "\\n" sequences (as written in YAML/JSON strings)
    become newlines. Unknown placeholders are left untouched.
    """
    template = template.replace("\\n", "\n")
    return Template(template).safe_substitute(
        file=relative_path(task.file, root),
        line=str(task.line),
        code_snippet=task.snippet or NO_SNIPPET,
        lang=task.language,
        author=author,
    )
