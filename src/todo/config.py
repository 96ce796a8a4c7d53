"""TodoConfig: user config and record-file discovery.

The record file is found by walking upward from the working directory:

    ~/projects/app/src/     (cwd, no .todo)
    ~/projects/app/.todo    <- nearest ancestor wins
    ~/.todo                 <- fallback when nothing is found, existence unchecked

Optional config file ($TODO_CONFIG, else $XDG_CONFIG_HOME/todo/config.toml):

    [todo]
    filename = ".todo"       # name searched for in each directory
    # file = "~/notes/todo"  # fixed record file, skips the search
    default_limit = 10       # records printed when no flag is given
    editor = "vi"            # used when $EDITOR is unset

Environment overrides the file: TODO_FILE, EDITOR. HOME is read from the
environment only.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from todo.errors import ConfigError, HomeUnset

logger = logging.getLogger("todo.config")

_DEFAULT_FILENAME = ".todo"
_DEFAULT_LIMIT = 10
_DEFAULT_EDITOR = "vi"


@dataclass
class TodoConfig:
    """Resolved settings for one invocation."""

    filename: str = _DEFAULT_FILENAME
    file: Path | None = None           # explicit record file, bypasses the search
    default_limit: int = _DEFAULT_LIMIT
    editor: str = _DEFAULT_EDITOR
    home: str | None = None

    def record_path(self, start: Path | None = None) -> Path:
        if self.file is not None:
            logger.debug("using configured record file %s", self.file)
            return self.file
        return find_record_file(start, filename=self.filename, home=self.home)


def find_record_file(
    start: Path | None = None,
    *,
    filename: str = _DEFAULT_FILENAME,
    home: str | None = None,
) -> Path:
    """Walk upward from start looking for filename; fall back to $HOME/filename."""
    start = Path(start) if start is not None else Path.cwd()
    for directory in (start, *start.parents):
        candidate = directory / filename
        if candidate.exists():
            logger.debug("found record file %s", candidate)
            return candidate
    if not home:
        raise HomeUnset(filename)
    fallback = Path(home) / filename
    logger.debug("no %s above %s, falling back to %s", filename, start, fallback)
    return fallback


def _default_config_path(env: Mapping[str, str]) -> Path | None:
    if env.get("TODO_CONFIG"):
        return Path(env["TODO_CONFIG"]).expanduser()
    if env.get("XDG_CONFIG_HOME"):
        return Path(env["XDG_CONFIG_HOME"]) / "todo" / "config.toml"
    if env.get("HOME"):
        return Path(env["HOME"]) / ".config" / "todo" / "config.toml"
    return None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config {path}: {exc}") from exc


def load_config(
    path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> TodoConfig:
    """Load the optional config file, then apply environment overrides."""
    env = os.environ if env is None else env
    config_path = Path(path) if path else _default_config_path(env)

    raw: dict[str, Any] = {}
    if config_path is not None and config_path.is_file():
        logger.debug("loading config %s", config_path)
        raw = _read_toml(config_path)

    section = raw.get("todo", {})
    if not isinstance(section, dict):
        raise ConfigError(f"[todo] must be a table in {config_path}")

    try:
        default_limit = int(section.get("default_limit", _DEFAULT_LIMIT))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"default_limit must be an integer in {config_path}") from exc

    file_value = env.get("TODO_FILE") or section.get("file")
    return TodoConfig(
        filename=str(section.get("filename", _DEFAULT_FILENAME)),
        file=Path(file_value).expanduser() if file_value else None,
        default_limit=default_limit,
        editor=env.get("EDITOR") or str(section.get("editor", _DEFAULT_EDITOR)),
        home=env.get("HOME") or None,
    )
