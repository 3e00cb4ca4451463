"""Opening and checking the application database."""

from __future__ import annotations

import logging
import re
import sqlite3
from datetime import timedelta
from decimal import Decimal

from .config import Config

logger = logging.getLogger(__name__)

_SUPPORTED_DRIVERS = frozenset({"sqlite", "sqlite3"})
_INTEGER = re.compile(r"[+-]?[0-9]+")

_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3_600 * 1_000_000_000,
    "d": 86_400 * 1_000_000_000,
    "w": 7 * 86_400 * 1_000_000_000,
}
_TERM = re.compile(r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h|d|w)")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS runners (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    age INTEGER,
    is_active BOOLEAN NOT NULL DEFAULT 1,
    country TEXT NOT NULL,
    personal_best TEXT,
    season_best TEXT
);
CREATE TABLE IF NOT EXISTS results (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    runner_id INTEGER NOT NULL,
    race_result TEXT NOT NULL,
    location TEXT NOT NULL,
    position INTEGER,
    year INTEGER NOT NULL
);
"""


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``1h30m``, ``2d`` or ``-1.5s``.

    Units are ns, us (or µs), ms, s, m, h, d and w; a bare ``0`` is allowed.
    Raises ValueError for anything else.
    """
    body = text
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")
    total = Decimal(0)
    position = 0
    while position < len(body):
        match = _TERM.match(body, position)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        total += Decimal(match[1]) * _NANOSECONDS[match[2]]
        position = match.end()
    microseconds = int(total // 1000)
    return timedelta(microseconds=-microseconds if negative else microseconds)


def _parse_count(value: str, key: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ValueError(f"Error during conversion of {key}: {value!r}")
    return int(value)


def init_database(config: Config) -> sqlite3.Connection:
    """Open the database named in the configuration and make sure it answers.

    Raises ValueError for missing or malformed settings and ConnectionError
    when the database cannot be opened.
    """
    connection_string = config.get_string("database.connection_string")
    max_idle = config.get_string("database.max_idle_connections")
    max_open = config.get_string("database.max_open_connections")
    max_lifetime = config.get_string("database.connection_max_lifetime") or (
        config.get_string("database.conecction_max_lifetime")
    )
    driver_name = config.get_string("database.driver_name") or "sqlite"

    if not connection_string:
        raise ValueError("Database connection string is missing")
    if driver_name.lower() not in _SUPPORTED_DRIVERS:
        raise ValueError(f"unknown database driver {driver_name!r}")

    # A single SQLite connection has no pool; the settings are still checked.
    _parse_count(max_idle, "max_idle_connections")
    _parse_count(max_open, "max_open_connections")
    try:
        parse_duration(max_lifetime)
    except ValueError as exc:
        raise ValueError(f"Error during conversion of connection_max_lifetime: {exc}") from exc

    connection: sqlite3.Connection | None = None
    try:
        connection = sqlite3.connect(
            connection_string,
            isolation_level=None,
            check_same_thread=False,
            uri=connection_string.startswith("file:"),
        )
        connection.execute("SELECT 1").fetchone()
        connection.executescript(_SCHEMA)
    except sqlite3.Error as exc:
        if connection is not None:
            connection.close()
        raise ConnectionError(f"Error while validating database: {exc}") from exc
    logger.debug("Database %s ready", connection_string)
    return connection