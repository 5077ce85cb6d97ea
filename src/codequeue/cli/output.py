"""Terminal output for CLI commands: one marker glyph per message kind."""

import sys

GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"

MARKERS = {
    "success": ("✓", GREEN),
    "info": ("•", BLUE),
    "warning": ("!", YELLOW),
    "error": ("✗", RED),
}


def _paint(text: str, color: str) -> str:
    stream = sys.stdout
    if getattr(stream, "isatty", None) and stream.isatty():
        return f"{color}{text}{RESET}"
    return text


def _emit(kind: str, message: str) -> None:
    marker, color = MARKERS[kind]
    print(f"{_paint(marker, color)} {message}")


def success(message: str) -> None:
    """Report something that was created, archived or saved."""
    _emit("success", message)


def info(message: str) -> None:
    _emit("info", message)


def warning(message: str) -> None:
    """Report a problem that did not fail the command."""
    _emit("warning", message)


def error(message: str) -> None:
    """Report a problem that fails the command."""
    _emit("error", message)


def header(message: str) -> None:
    print(_paint(message, BLUE))
