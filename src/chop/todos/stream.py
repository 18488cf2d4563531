"""In-memory todo stream and positional id assignment.

Ids are an index over the stream, recomputed on every read: 1, 2, 3, ... over
the todo items in input order. Passthrough lines never consume an id. Editing
the file shifts the ids of every item after the change, so an id is only valid
for the invocation that produced it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from chop.todos.parser import classify
from chop.todos.render import format_listing, render_record
from chop.todos.types import PassthroughLine, Record, TodoItem, TodoStatus

logger = logging.getLogger(__name__)


class TodoStream:
    """Ordered todo items and passthrough lines, in input order."""

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._records: list[Record] = list(records)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> TodoStream:
        records: list[Record] = []
        next_id = 1
        for raw_line in lines:
            record = classify(raw_line, next_id)
            if isinstance(record, TodoItem):
                next_id += 1
            records.append(record)

        stream = cls(records)
        logger.debug(
            "stream_parsed",
            extra={"lines": len(records), "todos": next_id - 1},
        )
        return stream

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def todos(self) -> list[TodoItem]:
        return [r for r in self._records if isinstance(r, TodoItem)]

    @property
    def passthrough(self) -> list[PassthroughLine]:
        return [r for r in self._records if isinstance(r, PassthroughLine)]

    def get(self, todo_id: int) -> TodoItem | None:
        for item in self.todos:
            if item.id == todo_id:
                return item
        return None

    def append(self, text: str, status: TodoStatus = TodoStatus.PENDING) -> TodoItem:
        """Append a new item with the next id after the highest one in use."""
        content = text.strip()
        if not content or "\n" in content or "\r" in content:
            raise ValueError("todo text must be a single non-empty line")

        # A final line without terminator would swallow the new item.
        last = self._records[-1] if self._records else None
        if isinstance(last, PassthroughLine) and not last.raw_line.endswith("\n"):
            self._records[-1] = PassthroughLine(last.raw_line + "\n")

        next_id = max((item.id for item in self.todos), default=0) + 1
        item = TodoItem(id=next_id, status=status, text=content)
        self._records.append(item)
        return item

    def filtered(self, keep: Callable[[TodoItem], bool]) -> TodoStream:
        """New stream without the todo items ``keep`` rejects.

        Passthrough lines always survive and record order is unchanged.
        """
        return TodoStream(
            r for r in self._records if isinstance(r, PassthroughLine) or keep(r)
        )

    def render(self) -> str:
        return "".join(render_record(r) for r in self._records)

    def render_listing(self) -> str:
        return "".join(format_listing(item) for item in self.todos)
