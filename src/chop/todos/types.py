"""Todo stream record types and the status vocabulary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from chop.errors import ConfigError

_STATUS_CHARS = {
    "todo": " ",
    "done": "x",
    "in-progress": ">",
}

_STATUS_ALIASES = {
    "todo": "todo",
    "t": "todo",
    "done": "done",
    "d": "done",
    "x": "done",
    "in-progress": "in-progress",
    "progress": "in-progress",
    "ip": "in-progress",
    ">": "in-progress",
}


class TodoStatus(StrEnum):
    """Checkbox state of a todo item."""

    PENDING = "todo"
    DONE = "done"
    IN_PROGRESS = "in-progress"

    @property
    def char(self) -> str:
        """Character written between the brackets of the canonical form."""
        return _STATUS_CHARS[self.value]

    @classmethod
    def from_char(cls, char: str) -> TodoStatus:
        if char in ("x", "X"):
            return cls.DONE
        if char == ">":
            return cls.IN_PROGRESS
        return cls.PENDING

    @classmethod
    def parse(cls, value: str, *, strict: bool = False) -> TodoStatus:
        """Normalize a status name such as ``done``, ``ip`` or ``>``.

        Unrecognized names map to PENDING unless ``strict`` is set, in which
        case they raise ConfigError.
        """
        name = _STATUS_ALIASES.get(value.strip().lower())
        if name is None:
            if strict:
                raise ConfigError(
                    f"unknown status: {value!r} (expected todo, done or in-progress)"
                )
            return cls.PENDING
        return cls(name)


@dataclass
class TodoItem:
    """A recognized checkbox line.

    ``id`` is positional: it is only meaningful for the stream that produced it.
    ``raw_line`` is None for items that were added rather than read.
    """

    id: int
    status: TodoStatus
    text: str
    raw_line: str | None = None

    @property
    def is_done(self) -> bool:
        return self.status == TodoStatus.DONE


@dataclass(frozen=True)
class PassthroughLine:
    """Any input line that is not a todo item; re-emitted byte for byte."""

    raw_line: str


Record = TodoItem | PassthroughLine
