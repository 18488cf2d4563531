"""Serializer for todo stream records."""

from __future__ import annotations

from chop.todos.types import PassthroughLine, Record, TodoItem, TodoStatus


def render_todo(status: TodoStatus, text: str) -> str:
    """Canonical todo line, always with a ``-`` marker and lowercase ``x``."""
    return f"- [{status.char}] {text}\n"


def render_record(record: Record) -> str:
    if isinstance(record, PassthroughLine):
        return record.raw_line
    return render_todo(record.status, record.text)


def format_listing(item: TodoItem) -> str:
    """Numbered listing line: ``<id>\\t[<c>] <text>``."""
    return f"{item.id}\t[{item.status.char}] {item.text}\n"
