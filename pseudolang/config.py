"""
Configuration loading.

Settings come from TOML, in this order:
- an explicit file passed with `--config`
- the nearest `pseudolang.toml` walking up from the working directory
- the nearest `pyproject.toml` holding a `[tool.pseudolang]` table
- built-in defaults

Unknown keys are ignored; known keys with the wrong shape raise ConfigError.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILENAME = "pseudolang.toml"
PYPROJECT_FILENAME = "pyproject.toml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DUPLICATE_POLICIES = ("reject", "replace")


@dataclass
class Config:
    """Resolved settings for the CLI and language server."""

    log_level: str = "WARNING"
    log_file: Path | None = None
    duplicate_open: str = "reject"
    extensions: list[str] = field(default_factory=lambda: [".pseudo"])
    source: Path | None = None  # file the settings were read from


def _coerce_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string, got {type(value).__name__}")
    return value.strip()


def parse_config(data: dict[str, Any], source: Path | None = None) -> Config:
    """Build a Config from an already decoded TOML table."""
    log_level = _coerce_str(data, "log_level", "WARNING").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

    duplicate_open = _coerce_str(data, "duplicate_open", "reject").lower()
    if duplicate_open not in DUPLICATE_POLICIES:
        raise ConfigError(f"duplicate_open must be one of {', '.join(DUPLICATE_POLICIES)}")

    log_file = None
    if data.get("log_file") is not None:
        raw = _coerce_str(data, "log_file", "")
        if raw:
            log_file = Path(raw).expanduser()
            if source is not None and not log_file.is_absolute():
                log_file = source.parent / log_file

    extensions = data.get("extensions", [".pseudo"])
    if not isinstance(extensions, list) or not all(isinstance(e, str) and e for e in extensions):
        raise ConfigError("extensions must be a list of non-empty strings")
    extensions = [e if e.startswith(".") else f".{e}" for e in extensions]

    return Config(
        log_level=log_level,
        log_file=log_file,
        duplicate_open=duplicate_open,
        extensions=extensions,
        source=source,
    )


def load_config_file(path: Path) -> Config:
    """Load settings from a `pseudolang.toml` or `pyproject.toml` file."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    if path.name == PYPROJECT_FILENAME:
        data = _tool_table(data, path)
        if not isinstance(data, dict):
            raise ConfigError(f"[tool.pseudolang] in {path} must be a table")
    return parse_config(data, source=path)


def find_config_file(start: Path) -> Path | None:
    """Find the nearest config file by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = p / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def _tool_table(data: dict[str, Any], path: Path) -> Any:
    """Return the `[tool.pseudolang]` value, or {} when absent."""
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigError(f"[tool] in {path} must be a table")
    return tool.get("pseudolang", {})


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    tool = data.get("tool")
    return isinstance(tool, dict) and isinstance(tool.get("pseudolang"), dict)


def load_config(path: Path | None = None, start: Path | None = None) -> Config:
    """Resolve settings from an explicit file or by discovery."""
    if path is not None:
        return load_config_file(path)
    found = find_config_file(start or Path.cwd())
    if found is None:
        return Config()
    return load_config_file(found)
