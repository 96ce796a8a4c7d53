"""Exceptions raised by the todo engine. The CLI turns them into one-line diagnostics."""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """Base class for every failure the engine reports."""


class RecordFileNotFound(TodoError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot open {path}: {reason}")


class RecordFileUndecodable(TodoError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"cannot read {path}: not valid UTF-8")


class HomeUnset(TodoError):
    def __init__(self, filename: str) -> None:
        super().__init__(f"no {filename} found and HOME is not set")


class InvalidArgument(TodoError):
    pass


class InvalidRecordText(InvalidArgument):
    pass


class ConfigError(TodoError):
    pass


class RankOutOfRange(TodoError):
    """The requested Nth record of a kind does not exist. Nothing was changed."""

    def __init__(self, kind: str, rank: int, available: int) -> None:
        self.kind = kind
        self.rank = rank
        self.available = available
        super().__init__(f"no {kind} record #{rank} ({available} {kind})")
