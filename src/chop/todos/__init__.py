"""Todo stream public API.

Public API:
- TodoStream: Parsed stream with positional ids
- filter_stream, mark: Filter/mutate engine

Types:
- TodoItem, PassthroughLine, TodoStatus
"""

from chop.todos.engine import (
    filter_stream,
    mark,
    mark_all,
    mark_by_id,
    mark_selected,
)
from chop.todos.parser import classify, parse_line
from chop.todos.render import format_listing, render_record, render_todo
from chop.todos.stream import TodoStream
from chop.todos.types import PassthroughLine, Record, TodoItem, TodoStatus

__all__ = [
    "PassthroughLine",
    "Record",
    "TodoItem",
    "TodoStatus",
    "TodoStream",
    "classify",
    "filter_stream",
    "format_listing",
    "mark",
    "mark_all",
    "mark_by_id",
    "mark_selected",
    "parse_line",
    "render_record",
    "render_todo",
]
