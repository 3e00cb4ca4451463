import sqlite3
from datetime import timedelta

import pytest

from runnerstrack.config import Config
from runnerstrack.database import init_database, parse_duration


def _config(**overrides):
    database = {
        "connection_string": ":memory:",
        "max_idle_connections": 5,
        "max_open_connections": 10,
        "connection_max_lifetime": "15m",
        "driver_name": "sqlite",
    }
    database.update(overrides)
    return Config({"database": database})


def test_init_database_creates_tables():
    connection = init_database(_config())
    names = {
        row[0]
        for row in connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    }
    assert {"runners", "results"} <= names


def test_init_database_file_persists(tmp_path):
    path = tmp_path / "runners.db"
    connection = init_database(_config(connection_string=str(path)))
    connection.execute(
        "INSERT INTO runners(first_name, last_name, age, country) VALUES (?, ?, ?, ?)",
        ("John", "Smith", 30, "US"),
    )
    connection.close()
    reopened = init_database(_config(connection_string=str(path)))
    rows = reopened.execute("SELECT first_name, last_name FROM runners").fetchall()
    assert rows == [("John", "Smith")]


def test_misspelt_lifetime_key_is_accepted():
    config = Config(
        {
            "database": {
                "connection_string": ":memory:",
                "max_idle_connections": "1",
                "max_open_connections": "1",
                "conecction_max_lifetime": "1h",
            }
        }
    )
    connection = init_database(config)
    assert connection.execute("SELECT 1").fetchone() == (1,)


def test_missing_connection_string():
    with pytest.raises(ValueError, match="connection string"):
        init_database(_config(connection_string=""))


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_idle_connections": "many"},
        {"max_open_connections": ""},
        {"connection_max_lifetime": "soon"},
        {"driver_name": "oracle"},
    ],
)
def test_bad_settings(overrides):
    with pytest.raises(ValueError):
        init_database(_config(**overrides))


def test_unreachable_database(tmp_path):
    path = tmp_path / "missing" / "dir" / "db.sqlite"
    with pytest.raises(ConnectionError):
        init_database(_config(connection_string=str(path)))


def test_transactions_can_begin():
    connection = init_database(_config())
    connection.execute("BEGIN")
    connection.execute(
        "INSERT INTO runners(first_name, last_name, age, country) VALUES ('a', 'b', 20, 'c')"
    )
    connection.rollback()
    assert connection.execute("SELECT COUNT(*) FROM runners").fetchone() == (0,)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", timedelta(0)),
        ("15m", timedelta(minutes=15)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("2d", timedelta(days=2)),
        ("1w", timedelta(weeks=1)),
        ("-1.5h", -timedelta(hours=1.5)),
        ("+250ms", timedelta(milliseconds=250)),
        ("3us", timedelta(microseconds=3)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "-", "5", "abc", "1x", "h", "1h 2m"])
def test_parse_duration_rejects(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_parse_duration_sums_terms():
    assert parse_duration("1h1h") == parse_duration("2h")


def test_init_database_returns_sqlite_connection():
    connection = init_database(_config())
    assert connection.execute("SELECT COUNT(*) FROM results").fetchone() == (0,)
    assert isinstance(connection, sqlite3.Connection)