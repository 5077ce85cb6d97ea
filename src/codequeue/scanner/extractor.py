"""TODO extraction from line-oriented document text.

Documents are consumed lazily, one line at a time, through a small
look-ahead buffer. The buffer never holds more than the snippet window, so
scanning a large file does not load it into memory.
"""

from __future__ import annotations

import logging
import re
from collections import deque
from collections.abc import Iterable, Iterator

from ..models import DEFAULT_TAG, Task

logger = logging.getLogger(__name__)

# TODO: message  /  TODO(tag): message
TODO_PATTERN = re.compile(r"TODO(\((.*?)\))?:\s*(.+)")

DEFAULT_SNIPPET_LINES = 5
# Minimum distance past the marker searched for the first non-blank line;
# the window always exceeds the capture cap
SNIPPET_LOOKAHEAD = 10
TRUNCATION_MARKER = "..."

# Characters that open comments in common languages; a TODO preceded only by
# these (and whitespace) sits on its own comment line
COMMENT_CHARS = frozenset("/*#-;%!<>'\"")
CLOSING_DELIMITERS = ("*/", "-->")


def _clean(line: str) -> str:
    return line.rstrip("\r\n")


class _Lookahead:
    """Line iterator that can peek a bounded number of lines ahead."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._source = iter(lines)
        self._buffer: deque[str] = deque()

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._buffer:
            return self._buffer.popleft()
        return _clean(next(self._source))

    def peek(self, offset: int) -> str | None:
        """Return the line ``offset`` positions ahead (0 = next), None past the end."""
        while len(self._buffer) <= offset:
            try:
                self._buffer.append(_clean(next(self._source)))
            except StopIteration:
                return None
        return self._buffer[offset]


def has_inline_code(prefix: str) -> bool:
    """Check whether text before a TODO token contains code, not just comment syntax."""
    return any(not ch.isspace() and ch not in COMMENT_CHARS for ch in prefix)


def _clean_title(message: str) -> str:
    title = message.strip()
    for delimiter in CLOSING_DELIMITERS:
        if title.endswith(delimiter):
            title = title[: -len(delimiter)].rstrip()
    return title


def lookahead_for(max_lines: int) -> int:
    """Number of lines searched for the start of a snippet."""
    return max(SNIPPET_LOOKAHEAD, max_lines + 1)


def _capture_snippet(window: _Lookahead, max_lines: int) -> str:
    """Capture the block of code following a TODO comment line."""
    start: int | None = None
    for offset in range(lookahead_for(max_lines)):
        line = window.peek(offset)
        if line is None:
            return ""
        if line.strip():
            start = offset
            break
    if start is None:
        return ""

    captured: list[str] = []
    offset = start
    while len(captured) < max_lines:
        line = window.peek(offset)
        if line is None or not line.strip():
            return "\n".join(captured)
        captured.append(line)
        offset += 1

    following = window.peek(offset)
    if following is not None and following.strip():
        captured.append(TRUNCATION_MARKER)
    return "\n".join(captured)


def iter_tasks(
    lines: Iterable[str],
    file: str,
    *,
    snippet_enabled: bool = True,
    snippet_line_count: int = DEFAULT_SNIPPET_LINES,
) -> Iterator[Task]:
    """Yield a Task for every TODO marker in ``lines``.

    Args:
        lines: Document lines, with or without trailing newlines
        file: Stable identifier of the document (used for identity)
        snippet_enabled: Whether to capture code context
        snippet_line_count: Maximum number of captured snippet lines

    Yields:
        Tasks in document order. Lines without a marker, and markers whose
        message is empty, produce nothing.
    """
    window = _Lookahead(lines)
    for index, line in enumerate(window):
        match = TODO_PATTERN.search(line)
        if not match:
            continue

        line_number = index + 1
        title = _clean_title(match.group(3))
        if not title:
            logger.debug("Skipping TODO with empty title at %s:%d", file, line_number)
            continue

        snippet = ""
        if snippet_enabled and snippet_line_count > 0:
            if has_inline_code(line[: match.start()]):
                snippet = line
            else:
                snippet = _capture_snippet(window, snippet_line_count)

        yield Task(
            file=file,
            line=line_number,
            tag=(match.group(2) or "").strip() or DEFAULT_TAG,
            title=title,
            snippet=snippet,
        )


def extract_tasks(
    lines: Iterable[str],
    file: str,
    *,
    snippet_enabled: bool = True,
    snippet_line_count: int = DEFAULT_SNIPPET_LINES,
) -> list[Task]:
    """Scan a document and return its TODO tasks in order."""
    tasks = list(
        iter_tasks(
            lines,
            file,
            snippet_enabled=snippet_enabled,
            snippet_line_count=snippet_line_count,
        )
    )
    logger.info("Found %d TODOs in %s", len(tasks), file)
    return tasks
