"""Loading of the application configuration file."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

_EXTENSIONS = ("json", "toml", "yaml", "yml")
_DEFAULT_SEARCH_PATHS = (".", "$HOME")


def _lower_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key).lower(): _lower_keys(item) for key, item in value.items()}
    return value


def _to_string(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class Config:
    """Configuration values addressed by case-insensitive dotted keys."""

    data: dict[str, Any] = field(default_factory=dict)
    path: Path | None = None

    def __post_init__(self) -> None:
        self.data = _lower_keys(self.data)

    def get_string(self, key: str) -> str:
        """Return the value at ``key`` as a string, or "" when it is absent."""
        node: Any = self.data
        for part in key.lower().split("."):
            if not isinstance(node, dict) or part not in node:
                return ""
            node = node[part]
        return _to_string(node)


def _parse(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lstrip(".")
    try:
        if suffix == "json":
            data = json.loads(text)
        elif suffix == "toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ValueError(f"Error while parsing config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Error while parsing config file {path}: not a mapping")
    return data


def init_config(filename: str, search_paths: Iterable[str] | None = None) -> Config:
    """Find ``filename`` with a supported extension in the search paths and load it.

    The current directory and then the home directory are searched by default.
    Raises FileNotFoundError when no file is found and ValueError when it
    cannot be parsed.
    """
    paths = _DEFAULT_SEARCH_PATHS if search_paths is None else tuple(search_paths)
    for directory in paths:
        base = Path(os.path.expanduser(os.path.expandvars(directory)))
        for extension in _EXTENSIONS:
            candidate = base / f"{filename}.{extension}"
            if candidate.is_file():
                return Config(_parse(candidate), candidate)
    raise FileNotFoundError(
        f"Config file {filename!r} not found in {', '.join(paths)}"
    )