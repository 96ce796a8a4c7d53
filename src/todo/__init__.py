"""Plain-text todo list: one record per line in the nearest .todo file.

Record lines:
    [ ] open task
    [X] closed task
Anything else is a decorative line, kept as is and never counted.

Ranks are 1-based positions among records of the same kind, recomputed on
every read. Closing a record moves it to the top of the file; reopening it
moves it to the bottom.
"""

__version__ = "0.1.0"

from todo.config import TodoConfig, find_record_file, load_config
from todo.models import LineKind, Record, classify, is_closed, is_open
from todo.store import Action, RecordFile

__all__ = [
    "Action",
    "LineKind",
    "Record",
    "RecordFile",
    "TodoConfig",
    "__version__",
    "classify",
    "find_record_file",
    "is_closed",
    "is_open",
    "load_config",
]
