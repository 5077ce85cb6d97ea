"""TODO scanning."""

from .extractor import (
    DEFAULT_SNIPPET_LINES,
    SNIPPET_LOOKAHEAD,
    TODO_PATTERN,
    TRUNCATION_MARKER,
    extract_tasks,
    has_inline_code,
    iter_tasks,
    lookahead_for,
)

__all__ = [
    "DEFAULT_SNIPPET_LINES",
    "SNIPPET_LOOKAHEAD",
    "TODO_PATTERN",
    "TRUNCATION_MARKER",
    "extract_tasks",
    "has_inline_code",
    "iter_tasks",
    "lookahead_for",
]
