"""Filter and mutate passes over a todo stream.

Filtering only drops todo items; mutation only changes status. Neither touches
passthrough lines, ids, or record order.
"""

from __future__ import annotations

import logging

from chop.errors import ConfigError
from chop.selector import Selector
from chop.todos.render import render_todo
from chop.todos.stream import TodoStream
from chop.todos.types import TodoItem, TodoStatus

logger = logging.getLogger(__name__)


def filter_stream(
    stream: TodoStream,
    *,
    only: TodoStatus | None = None,
    exclude: TodoStatus | None = None,
) -> TodoStream:
    """Keep items with status ``only``, or drop items with status ``exclude``.

    With neither, every item is kept. Passing both raises ConfigError.
    """
    if only is not None and exclude is not None:
        raise ConfigError("include and exclude filters are mutually exclusive")
    if only is not None:
        return stream.filtered(lambda item: item.status == only)
    if exclude is not None:
        return stream.filtered(lambda item: item.status != exclude)
    return stream


def mark_by_id(stream: TodoStream, todo_id: int, status: TodoStatus) -> list[TodoItem]:
    """Set the status of the item with ``todo_id``. A missing id is a no-op."""
    item = stream.get(todo_id)
    if item is None:
        logger.info("todo_id_not_found", extra={"todo_id": todo_id})
        return []
    item.status = status
    return [item]


def mark_all(stream: TodoStream, status: TodoStatus) -> list[TodoItem]:
    items = stream.todos
    for item in items:
        item.status = status
    return items


def mark_selected(
    stream: TodoStream,
    status: TodoStatus,
    selector: Selector,
) -> list[TodoItem]:
    """Let ``selector`` pick items by their canonical line, then mark them.

    Each returned line marks at most one item: the first, in stream order,
    whose current rendering matches it exactly. Since a marked item renders
    differently afterwards, repeated identical lines reach later duplicates.
    Lines matching nothing are ignored.
    """
    items = stream.todos
    candidates = [_selection_line(item) for item in items]
    selected = selector.select(candidates)

    marked: list[TodoItem] = []
    for line in selected:
        for item in items:
            if _selection_line(item) == line:
                item.status = status
                marked.append(item)
                break
        else:
            logger.debug("selection_unmatched", extra={"selection": line})
    return marked


def mark(
    stream: TodoStream,
    status: TodoStatus,
    *,
    todo_id: int = 0,
    selector: Selector | None = None,
) -> list[TodoItem]:
    """Dispatch to one of the three target strategies.

    ``todo_id`` 0 means every item; a selector means interactive selection and
    cannot be combined with an id.
    """
    if todo_id < 0:
        raise ConfigError(f"invalid todo id: {todo_id}")
    if selector is not None:
        if todo_id:
            raise ConfigError("an id cannot be combined with interactive selection")
        marked = mark_selected(stream, status, selector)
    elif todo_id:
        marked = mark_by_id(stream, todo_id, status)
    else:
        marked = mark_all(stream, status)

    logger.info("todos_marked", extra={"status": str(status), "count": len(marked)})
    return marked


def _selection_line(item: TodoItem) -> str:
    return render_todo(item.status, item.text).rstrip("\n")
