"""Read and rewrite the plain-text record file.

RecordFile is the public API:
    records = RecordFile(Path("~/.todo").expanduser())
    records.append("buy milk")
    for rec in records.iter_matching(is_open, limit=10):
        print(rec)
    records.close(2)      # 2nd open record -> [X], moved to the front
    records.reopen(1)     # 1st closed record -> [ ], moved to the end

File layout: one record per line, "[ ] text" (open) or "[X] text" (closed).
Any other line is decorative: kept verbatim, never counted when ranking.

Mutations read the whole file, edit the line list and write it back through a
temp file + rename. There is no locking: two invocations racing on the same
file can lose one of the updates.
"""

from __future__ import annotations

import enum
import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from todo.errors import (
    InvalidRecordText,
    RankOutOfRange,
    RecordFileNotFound,
    RecordFileUndecodable,
)
from todo.models import (
    CLOSED_MARKER,
    OPEN_MARKER,
    Record,
    classify,
    format_open,
    is_closed,
    is_open,
    record_text,
    with_marker,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    Predicate = Callable[[str], bool]

logger = logging.getLogger("todo.store")


class Action(enum.Enum):
    CLOSE = "close"
    REOPEN = "reopen"


# action -> (lines it selects from, marker written, kind name for messages)
_ACTIONS: dict[Action, tuple[Callable[[str], bool], str, str]] = {
    Action.CLOSE: (is_open, CLOSED_MARKER, "open"),
    Action.REOPEN: (is_closed, OPEN_MARKER, "closed"),
}


def find_rank(lines: list[str], predicate: Predicate, n: int) -> int | None:
    """Index of the nth (1-based) line satisfying predicate, or None."""
    count = 0
    for index, line in enumerate(lines):
        if predicate(line):
            count += 1
            if count == n:
                return index
    return None


class RecordFile:
    """A todo file on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read_lines(self) -> list[str]:
        """Whole file as a list of lines without terminators."""
        try:
            with self.path.open(encoding="utf-8-sig") as f:
                return [line.rstrip("\n") for line in f]
        except OSError as exc:
            raise RecordFileNotFound(self.path, exc.strerror or str(exc)) from exc
        except UnicodeDecodeError as exc:
            raise RecordFileUndecodable(self.path) from exc

    def iter_matching(self, predicate: Predicate, limit: int) -> Iterator[Record]:
        """Yield up to limit records satisfying predicate, in file order, with their rank."""
        if limit <= 0:
            return
        rank = 0
        for line in self.read_lines():
            if not predicate(line):
                continue
            rank += 1
            yield Record(rank=rank, kind=classify(line), text=record_text(line), line=line)
            if rank >= limit:
                return

    # ------------------------------------------------------------------
    # Write — state changes (whole-file rewrite)
    # ------------------------------------------------------------------

    def close(self, n: int) -> str:
        """Mark the nth open record done and move it to the top of the file."""
        return self.mutate(Action.CLOSE, n)

    def reopen(self, n: int) -> str:
        """Mark the nth closed record open again and move it to the bottom."""
        return self.mutate(Action.REOPEN, n)

    def mutate(self, action: Action, n: int) -> str:
        """Flip the nth matching record and relocate it. Returns the new line.

        Raises RankOutOfRange, leaving the file untouched, when there is no
        nth record of the selected kind.
        """
        predicate, marker, kind = _ACTIONS[action]
        lines = self.read_lines()
        index = find_rank(lines, predicate, n)
        if index is None:
            available = sum(1 for line in lines if predicate(line))
            raise RankOutOfRange(kind, n, available)

        line = with_marker(lines.pop(index), marker)
        if action is Action.CLOSE:
            lines.insert(0, line)
        else:
            lines.append(line)

        self._rewrite(lines)
        logger.info("%s #%d: %s", action.value, n, record_text(line))
        return line

    # ------------------------------------------------------------------
    # Write — new records (append only)
    # ------------------------------------------------------------------

    def append(self, text: str) -> str:
        """Append a new open record. Returns the written line."""
        if not text.strip():
            raise InvalidRecordText("record text is empty")
        return self.append_many([text])[0]

    def append_many(self, texts: Iterable[str]) -> list[str]:
        """Append one open record per non-blank text, all in a single write."""
        new_lines = [format_open(t) for t in texts if t.strip()]
        for line in new_lines:
            if "\n" in line or "\r" in line:
                raise InvalidRecordText(f"record text must be a single line: {line[4:]!r}")
        if not new_lines:
            return []

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            prefix = "" if self._ends_with_newline() else "\n"
            with self.path.open("a", encoding="utf-8") as f:
                f.write(prefix + "".join(line + "\n" for line in new_lines))
        except OSError as exc:
            raise RecordFileNotFound(self.path, exc.strerror or str(exc)) from exc

        logger.info("appended %d record(s) to %s", len(new_lines), self.path)
        return new_lines

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ends_with_newline(self) -> bool:
        """True for a missing or empty file, or one whose last byte is a newline."""
        try:
            with self.path.open("rb") as f:
                f.seek(0, 2)
                if f.tell() == 0:
                    return True
                f.seek(-1, 2)
                return f.read(1) == b"\n"
        except FileNotFoundError:
            return True

    def _rewrite(self, lines: list[str]) -> None:
        """Replace the file contents via temp file + rename. Follows symlinks."""
        target = self.path.resolve()
        tmp = target.with_name(target.name + ".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                f.writelines(line + "\n" for line in lines)
            shutil.copymode(target, tmp)
            tmp.replace(target)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise RecordFileNotFound(target, exc.strerror or str(exc)) from exc
        logger.debug("rewrote %s (%d lines)", target, len(lines))
