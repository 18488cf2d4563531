"""Centralized logging configuration for chop.

Standard output carries the todo stream, so every handler writes to stderr.
The CLI calls configure_logging() once, before doing any work.

Logging Levels:
- DEBUG: Parse statistics, config and file activity
- INFO: Mutation summaries, ids that matched nothing
- WARNING: Recoverable issues (the default threshold)
- ERROR: Failures that abort the invocation
"""

import logging
import os
import sys

ENV_VAR = "CHOP_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", None, None).__dict__
) | {"message", "asctime", "component", "taskName"}


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    - chop.todos.engine -> todos
    - chop.selector -> selector

    Fields passed with ``extra=`` are appended to the message as ``key=value``
    pairs, e.g. ``todos_marked status=done count=2``.
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "chop":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields = _extra_fields(record)
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


def resolve_level(level: str | None = None, fallback: str | None = None) -> str:
    """Pick the effective level: explicit, then CHOP_LOG_LEVEL, then fallback."""
    for candidate in (level, os.environ.get(ENV_VAR), fallback):
        if candidate and candidate.upper() in LEVELS:
            return candidate.upper()
    return DEFAULT_LEVEL


def configure_logging(
    level: str | None = None,
    use_rich: bool | None = None,
) -> None:
    """Configure logging for chop.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses CHOP_LOG_LEVEL env var or WARNING.
        use_rich: Use Rich handler for colorful output. Defaults to whether
            stderr is a terminal.
    """
    level = resolve_level(level)
    log_level = getattr(logging, level)

    if use_rich is None:
        use_rich = sys.stderr.isatty()

    console_handler: logging.Handler
    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        console_handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=False,
            show_path=False,
            show_time=False,
            markup=False,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[console_handler],
        force=True,
    )
