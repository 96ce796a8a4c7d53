"""Line classification and record types for the todo file."""

from __future__ import annotations

import enum
from dataclasses import dataclass

OPEN_MARKER = "[ ]"
CLOSED_MARKER = "[X]"
_MARKER_LEN = len(OPEN_MARKER)


class LineKind(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"
    DECORATIVE = "decorative"


def classify(line: str) -> LineKind:
    """Classify a line by its first three characters only."""
    prefix = line[:_MARKER_LEN]
    if prefix == OPEN_MARKER:
        return LineKind.OPEN
    if prefix == CLOSED_MARKER:
        return LineKind.CLOSED
    return LineKind.DECORATIVE


def is_open(line: str) -> bool:
    return classify(line) is LineKind.OPEN


def is_closed(line: str) -> bool:
    return classify(line) is LineKind.CLOSED


def record_text(line: str) -> str:
    """Strip the marker and the single separating space from a record line."""
    rest = line[_MARKER_LEN:].rstrip("\r\n")
    if rest.startswith(" "):
        return rest[1:]
    return rest


def format_open(text: str) -> str:
    return f"{OPEN_MARKER} {text}"


def with_marker(line: str, marker: str) -> str:
    """Replace the marker of a record line, keeping the rest verbatim."""
    return marker + line[_MARKER_LEN:]


@dataclass(frozen=True)
class Record:
    """A record as seen by the query path: its rank within its kind and its text."""

    rank: int
    kind: LineKind
    text: str
    line: str                          # full line, marker included

    def __str__(self) -> str:
        return f"{self.rank:>3}. {self.line}"
