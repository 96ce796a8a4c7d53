"""todo CLI — a task list kept in a plain-text .todo file.

Usage:
    todo                       print up to 10 open records
    todo buy milk              append "[ ] buy milk"
    todo -- -5 degrees         append text that starts with a dash
    cat list.txt | todo        append one record per non-blank line (also: todo -)
    todo -t N / -d N / -a N    print N open / closed / open then closed records
    todo -x N                  close the Nth open record (moves it to the top)
    todo -o N                  reopen the Nth closed record (moves it to the bottom)
    todo -e                    open the record file in $EDITOR
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from todo import __version__
from todo.config import TodoConfig, load_config
from todo.errors import RankOutOfRange, TodoError
from todo.models import is_closed, is_open
from todo.store import RecordFile

if TYPE_CHECKING:
    from todo.store import Predicate

logger = logging.getLogger("todo.cli")

_PROG = "todo"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TodoClickError(click.ClickException):
    """ClickException that prints "todo: <reason>" instead of "Error: <reason>"."""

    def show(self, file=None) -> None:  # type: ignore[no-untyped-def]
        click.echo(f"{_PROG}: {self.format_message()}", err=True, file=file)


class RankType(click.ParamType):
    """A record rank: ASCII digits only, greater than zero."""

    name = "N"

    def convert(self, value, param, ctx):  # type: ignore[no-untyped-def]
        if isinstance(value, int):
            number = value
        elif value.isascii() and value.isdigit():
            number = int(value)
        else:
            number = 0
        if number <= 0:
            self.fail(f"{value!r} is not a positive number", param, ctx)
        return number


RANK = RankType()


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _load_cfg(file: str | None) -> TodoConfig:
    try:
        cfg = load_config()
    except TodoError as exc:
        raise TodoClickError(str(exc)) from exc
    if file:
        cfg.file = Path(file).expanduser()
    return cfg


def _record_file(cfg: TodoConfig) -> RecordFile:
    try:
        return RecordFile(cfg.record_path())
    except TodoError as exc:
        raise TodoClickError(str(exc)) from exc


def _stdin_is_piped() -> bool:
    return not click.get_text_stream("stdin").isatty()


def _read_stdin_records() -> list[str]:
    """One record per stdin line, blank lines skipped."""
    stdin = click.get_text_stream("stdin")
    return [line.rstrip("\r\n") for line in stdin if line.strip()]


def _print_matching(records: RecordFile, predicate: Predicate, limit: int) -> None:
    for rec in records.iter_matching(predicate, limit):
        click.echo(str(rec))


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-v", "--version", prog_name=_PROG)
@click.option("-t", "--print-todo", "print_todo", type=RANK, help="Print up to N open records.")
@click.option("-d", "--print-done", "print_done", type=RANK, help="Print up to N closed records.")
@click.option("-a", "--print-all", "print_all", type=RANK,
              help="Print up to N open, then up to N closed records.")
@click.option("-x", "--done", "close_rank", type=RANK, help="Close the Nth open record.")
@click.option("-o", "--todo", "reopen_rank", type=RANK, help="Reopen the Nth closed record.")
@click.option("-e", "--edit", is_flag=True, help="Open the record file in $EDITOR (default vi).")
@click.option("--file", "file", type=click.Path(dir_okay=False),
              help="Use this record file instead of searching for .todo.")
@click.option("--debug", is_flag=True, help="Log to stderr.")
@click.argument("words", nargs=-1)
def cli(
    print_todo: int | None,
    print_done: int | None,
    print_all: int | None,
    close_rank: int | None,
    reopen_rank: int | None,
    edit: bool,
    file: str | None,
    debug: bool,
    words: tuple[str, ...],
) -> None:
    """Keep a todo list in the nearest .todo file (or ~/.todo).

    Any other arguments are joined into a new open record.
    """
    _setup_logging(debug)
    cfg = _load_cfg(file)

    if "-" in words and len(words) > 1:
        raise click.UsageError("'-' reads records from stdin and takes no other arguments")

    records = _record_file(cfg)
    logger.debug("record file: %s", records.path)

    if edit:
        try:
            click.edit(filename=str(records.path), editor=cfg.editor)
        except click.ClickException as exc:
            raise TodoClickError(exc.format_message()) from exc
        return

    print_flags = (print_todo, print_done, print_all)
    acted = False
    try:
        for verb, action, rank in (
            ("closed", records.close, close_rank),
            ("reopened", records.reopen, reopen_rank),
        ):
            if rank is None:
                continue
            acted = True
            try:
                line = action(rank)
            except RankOutOfRange as exc:
                # Reported, but not a failure: the file is left as it was.
                click.echo(f"{_PROG}: {exc}", err=True)
                continue
            click.echo(f"{verb}: {line}")

        if words == ("-",):
            new_texts = _read_stdin_records()
        elif words:
            new_texts = [" ".join(words)]
        elif not acted and all(flag is None for flag in print_flags) and _stdin_is_piped():
            new_texts = _read_stdin_records()
        else:
            new_texts = []
        if new_texts:
            acted = True
            for line in records.append_many(new_texts):
                click.echo(f"added: {line}")

        if print_todo is not None:
            _print_matching(records, is_open, print_todo)
        if print_done is not None:
            _print_matching(records, is_closed, print_done)
        if print_all is not None:
            _print_matching(records, is_open, print_all)
            _print_matching(records, is_closed, print_all)

        if not acted and all(flag is None for flag in print_flags):
            _print_matching(records, is_open, cfg.default_limit)
    except TodoError as exc:
        raise TodoClickError(str(exc)) from exc


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
