"""Line classifier for Markdown checkbox lists.

Grammar (permissive, never validating)::

    <ws>* ('-'|'*'|'+') ' ' ' '* ('[' <c> ']' ' '*)? <text> EOL?

``<c>`` is ``x``/``X`` (done), ``>`` (in progress) or anything else (pending).
Lines that do not match, and matching lines whose text is empty, are
passthrough lines.
"""

from __future__ import annotations

from typing import NamedTuple

from chop.todos.types import PassthroughLine, TodoItem, TodoStatus

LIST_MARKERS = ("-", "*", "+")


class ParsedTodo(NamedTuple):
    status: TodoStatus
    text: str


def parse_line(raw_line: str) -> ParsedTodo | None:
    """Parse a raw line into status and text, or None for a passthrough line."""
    line = raw_line.lstrip(" \t")

    if not line.rstrip(" \t\r\n"):
        return None

    if len(line) < 2 or line[0] not in LIST_MARKERS or line[1] != " ":
        return None
    rest = line[2:].lstrip(" ")

    status = TodoStatus.PENDING
    if len(rest) >= 3 and rest[0] == "[" and rest[2] == "]":
        status = TodoStatus.from_char(rest[1])
        rest = rest[3:].lstrip(" ")

    text = rest.rstrip("\r\n")
    if not text:
        return None

    return ParsedTodo(status, text)


def classify(raw_line: str, todo_id: int) -> TodoItem | PassthroughLine:
    """Classify a raw line, giving a recognized todo item the id ``todo_id``."""
    parsed = parse_line(raw_line)
    if parsed is None:
        return PassthroughLine(raw_line)
    return TodoItem(
        id=todo_id,
        status=parsed.status,
        text=parsed.text,
        raw_line=raw_line,
    )
