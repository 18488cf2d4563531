"""Main CLI application."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import click
import typer
from typer.core import TyperGroup

from chop import __version__
from chop.cli.console import dim, error
from chop.config import ChopConfig, load_config
from chop.errors import ChopError, ConfigError
from chop.files import read_lines, replace_file, write_stream
from chop.logging import LEVELS, configure_logging, resolve_level
from chop.selector import CommandSelector, Selector
from chop.todos import TodoStatus, TodoStream, filter_stream, mark, render_todo


class ChopGroup(TyperGroup):
    """Command group that exits with status 1 on any failure, usage errors too."""

    def main(self, *args: Any, standalone_mode: bool = True, **kwargs: Any) -> Any:
        try:
            rv = super().main(*args, standalone_mode=False, **kwargs)
        except click.ClickException as e:
            e.show()
            rv = 1
        except click.exceptions.Abort:
            error("Aborted!")
            rv = 1
        if not standalone_mode:
            return rv
        sys.exit(rv if isinstance(rv, int) else 0)


app = typer.Typer(
    name="chop",
    help="Stream filter for Markdown todo lists. Reads stdin, writes stdout.",
    cls=ChopGroup,
    invoke_without_command=True,
    add_completion=False,
    pretty_exceptions_enable=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=(
        "Examples: "
        "cat todos.md | chop --in-progress; "
        "chop -f todos.md -w done 3; "
        'chop add "Buy milk" >> todos.md'
    ),
)


@dataclass
class CliState:
    """Resolved root options shared with every command."""

    config: ChopConfig
    file: Path | None = None
    write: bool = False
    only: TodoStatus | None = None
    exclude: TodoStatus | None = None

    @property
    def filtering(self) -> bool:
        return self.only is not None or self.exclude is not None


@dataclass
class RootOptions:
    """Root options as given on the command line.

    Nothing is loaded or checked until a command runs, so ``chop CMD --help``
    never reads the config file.
    """

    file: Path | None
    write: bool
    only: str | None
    exclude: str | None
    show_todo: bool
    show_done: bool
    show_in_progress: bool
    config_path: Path | None
    log_level: str | None

    def resolve(self) -> CliState:
        """Load config, configure logging and validate the root options."""
        if self.log_level is not None and self.log_level.upper() not in LEVELS:
            raise ConfigError(f"unknown log level: {self.log_level}")
        config = load_config(self.config_path)
        configure_logging(resolve_level(self.log_level, config.log_level))

        included, excluded = _resolve_filter(
            only=self.only,
            exclude=self.exclude,
            show_todo=self.show_todo,
            show_done=self.show_done,
            show_in_progress=self.show_in_progress,
        )
        if self.write and self.file is None:
            raise ConfigError("--write requires --file")
        return CliState(
            config=config,
            file=self.file,
            write=self.write,
            only=included,
            exclude=excluded,
        )


def _run(action: Callable[[], None]) -> None:
    """Run a pipeline step, turning fatal errors into exit status 1."""
    try:
        action()
    except ConfigError as e:
        error(str(e))
        ctx = click.get_current_context(silent=True)
        if ctx is not None:
            dim(ctx.get_usage())
        raise typer.Exit(1) from None
    except ChopError as e:
        error(str(e))
        raise typer.Exit(1) from None
    except MemoryError:
        error("Failed to allocate memory")
        raise typer.Exit(1) from None


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


# ---------------------------------------------------------------------------
# Root options / default filter mode
# ---------------------------------------------------------------------------


@app.callback()
def _default(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="Read todos from FILE instead of stdin"),
    ] = None,
    write: Annotated[
        bool,
        typer.Option("--write", "-w", help="Write the result back to --file"),
    ] = False,
    only: Annotated[
        str | None,
        typer.Option(
            "--only", "-o", metavar="STATUS", help="Filter: keep only STATUS items"
        ),
    ] = None,
    exclude: Annotated[
        str | None,
        typer.Option(
            "--exclude", "-x", metavar="STATUS", help="Filter: drop STATUS items"
        ),
    ] = None,
    show_todo: Annotated[
        bool, typer.Option("--todo", help="Filter: show only pending")
    ] = False,
    show_done: Annotated[
        bool, typer.Option("--done", help="Filter: show only done")
    ] = False,
    show_in_progress: Annotated[
        bool, typer.Option("--in-progress", help="Filter: show only in-progress")
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level", help="DEBUG, INFO, WARNING or ERROR (logs go to stderr)"
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=_version_callback,
            is_eager=True,
            help="Show version",
        ),
    ] = None,
) -> None:
    """Canonicalize todo lines from stdin, keeping every other line as is.

    Statuses: todo (t), done (d, x), in-progress (progress, ip, >).
    """
    ctx.obj = RootOptions(
        file=file,
        write=write,
        only=only,
        exclude=exclude,
        show_todo=show_todo,
        show_done=show_done,
        show_in_progress=show_in_progress,
        config_path=config_path,
        log_level=log_level,
    )

    if ctx.invoked_subcommand is None:
        _run(lambda: _filter(ctx.obj.resolve()))


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """Print todo items with their positional ids."""
    _run(lambda: _list(ctx.obj.resolve()))


@app.command("mark")
def mark_cmd(
    ctx: typer.Context,
    status: Annotated[str, typer.Argument(help="New status: todo, done, in-progress")],
    todo_id: Annotated[
        int,
        typer.Argument(
            metavar="[ID]", min=0, help="Todo ID; 0 or omitted marks every item"
        ),
    ] = 0,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Pick items with the selector"),
    ] = False,
) -> None:
    """Set the status of one item, every item, or interactively picked items."""
    _run(
        lambda: _mark(
            ctx.obj.resolve(),
            TodoStatus.parse(status, strict=True),
            todo_id=todo_id,
            interactive=interactive,
        )
    )


app.command("status", hidden=True)(mark_cmd)


@app.command("done")
def done_cmd(
    ctx: typer.Context,
    todo_id: Annotated[
        int,
        typer.Argument(
            metavar="[ID]", min=0, help="Todo ID; 0 or omitted marks every item"
        ),
    ] = 0,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Pick items with the selector"),
    ] = False,
) -> None:
    """Mark todos as done."""
    _run(
        lambda: _mark(
            ctx.obj.resolve(),
            TodoStatus.DONE,
            todo_id=todo_id,
            interactive=interactive,
        )
    )


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    words: Annotated[
        list[str] | None,
        typer.Argument(help="Todo text; one item per stdin line when omitted"),
    ] = None,
    status: Annotated[
        str, typer.Option("--status", "-s", help="Status of the new item")
    ] = "todo",
) -> None:
    """Emit a new todo line, or append it to --file."""
    _run(
        lambda: _add(
            ctx.obj.resolve(), words or [], TodoStatus.parse(status, strict=True)
        )
    )


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------


def _filter(state: CliState) -> None:
    stream = _load(state)
    result = filter_stream(stream, only=state.only, exclude=state.exclude)
    _emit(state, result.render())


def _list(state: CliState) -> None:
    if state.write:
        raise ConfigError("--write cannot be used with list")
    stream = _load(state)
    result = filter_stream(stream, only=state.only, exclude=state.exclude)
    write_stream(result.render_listing(), sys.stdout.buffer)


def _mark(
    state: CliState,
    status: TodoStatus,
    *,
    todo_id: int,
    interactive: bool,
) -> None:
    if state.filtering:
        raise ConfigError("filter options cannot be combined with mark")
    if interactive and todo_id:
        raise ConfigError("an ID cannot be combined with --interactive")

    selector = _create_selector(state.config) if interactive else None
    stream = _load(state)
    mark(stream, status, todo_id=todo_id, selector=selector)
    _emit(state, stream.render())


def _add(state: CliState, words: list[str], status: TodoStatus) -> None:
    if state.filtering:
        raise ConfigError("filter options cannot be combined with add")

    if words:
        texts = [" ".join(words).strip()]
    else:
        texts = [line.strip() for line in read_lines(None, _stdin())]
    texts = [text for text in texts if text]
    if not texts:
        raise ConfigError("add requires todo text")

    if state.file is None:
        _emit(state, "".join(render_todo(status, text) for text in texts))
        return

    stream = _load(state)
    for text in texts:
        stream.append(text, status)
    _emit(state, stream.render())


def _resolve_filter(
    *,
    only: str | None,
    exclude: str | None,
    show_todo: bool,
    show_done: bool,
    show_in_progress: bool,
) -> tuple[TodoStatus | None, TodoStatus | None]:
    includes: list[TodoStatus] = []
    if only is not None:
        includes.append(TodoStatus.parse(only, strict=True))
    for flag, status in (
        (show_todo, TodoStatus.PENDING),
        (show_done, TodoStatus.DONE),
        (show_in_progress, TodoStatus.IN_PROGRESS),
    ):
        if flag:
            includes.append(status)

    if len(includes) > 1:
        raise ConfigError("only one include filter may be given")
    excluded = TodoStatus.parse(exclude, strict=True) if exclude is not None else None
    included = includes[0] if includes else None
    if included is not None and excluded is not None:
        raise ConfigError("include and exclude filters are mutually exclusive")
    return included, excluded


def _create_selector(config: ChopConfig) -> Selector:
    try:
        return CommandSelector(config.selector.command)
    except ValueError as e:
        raise ConfigError(f"invalid selector command: {e}") from e


def _stdin():
    return sys.stdin.buffer


def _load(state: CliState) -> TodoStream:
    return TodoStream.from_lines(read_lines(state.file, _stdin()))


def _emit(state: CliState, text: str) -> None:
    if state.write and state.file is not None:
        replace_file(state.file, text)
    else:
        write_stream(text, sys.stdout.buffer)


if __name__ == "__main__":
    app()
