"""Storage of runners."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from http import HTTPStatus
from typing import Any

from .models import ResponseError, Runner

_INTERNAL_ERROR = int(HTTPStatus.INTERNAL_SERVER_ERROR)
_BATCH_LIMIT = 10

_RUNNER_COLUMNS = (
    "id, first_name, last_name, age, is_active, country, personal_best, season_best"
)


@contextmanager
def _database_errors() -> Iterator[None]:
    """Turn database failures into internal-server-error responses."""
    try:
        yield
    except sqlite3.Error as exc:
        raise ResponseError(str(exc), _INTERNAL_ERROR) from exc


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _runner_from_row(row: Sequence[Any]) -> Runner:
    (runner_id, first_name, last_name, age, is_active, country,
     personal_best, season_best) = row
    return Runner(
        id=_text(runner_id),
        first_name=_text(first_name),
        last_name=_text(last_name),
        age=0 if age is None else int(age),
        is_active=bool(is_active),
        country=_text(country),
        personal_best=_text(personal_best),
        season_best=_text(season_best),
    )


def _no_user_found() -> ResponseError:
    return ResponseError("No user found", _INTERNAL_ERROR)


class RunnersRepository:
    """Reads and writes the ``runners`` table.

    ``transaction`` is set while a transaction spanning both repositories is
    in progress; writes then stay uncommitted until it ends.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection
        self.transaction: sqlite3.Connection | None = None

    @property
    def _active(self) -> sqlite3.Connection:
        return self.transaction if self.transaction is not None else self.connection

    def _finish_write(self) -> None:
        if self.transaction is None:
            self.connection.commit()

    def create_runner(self, runner: Runner) -> Runner:
        """Store a new active runner and return it with its id."""
        with _database_errors():
            cursor = self._active.execute(
                "INSERT INTO runners(first_name, last_name, age, is_active, country) "
                "VALUES (?, ?, ?, ?, ?)",
                (runner.first_name, runner.last_name, runner.age, True, runner.country),
            )
            self._finish_write()
        return Runner(
            id=_text(cursor.lastrowid),
            first_name=runner.first_name,
            last_name=runner.last_name,
            age=runner.age,
            is_active=True,
            country=runner.country,
        )

    def update_runner(self, runner: Runner) -> None:
        """Update name, age and country of an existing runner."""
        with _database_errors():
            cursor = self._active.execute(
                "UPDATE runners SET first_name = ?, last_name = ?, age = ?, country = ? "
                "WHERE id = ?",
                (runner.first_name, runner.last_name, runner.age, runner.country,
                 runner.id),
            )
            self._finish_write()
        if cursor.rowcount == 0:
            raise _no_user_found()

    def update_runner_results(self, runner: Runner) -> None:
        """Store the runner's personal and season best; empty values become NULL."""
        with _database_errors():
            self._active.execute(
                "UPDATE runners SET personal_best = ?, season_best = ? WHERE id = ?",
                (runner.personal_best or None, runner.season_best or None, runner.id),
            )
            self._finish_write()

    def delete_runner(self, runner_id: str) -> None:
        """Mark a runner as inactive."""
        with _database_errors():
            cursor = self._active.execute(
                "UPDATE runners SET is_active = ? WHERE id = ?", (False, runner_id)
            )
            self._finish_write()
        if cursor.rowcount == 0:
            raise _no_user_found()

    def get_runner(self, runner_id: str) -> Runner:
        """Return the runner with that id; an empty runner when there is none."""
        with _database_errors():
            row = self._active.execute(
                f"SELECT {_RUNNER_COLUMNS} FROM runners WHERE id = ?", (runner_id,)
            ).fetchone()
        return Runner() if row is None else _runner_from_row(row)

    def get_all_runners(self) -> list[Runner]:
        """Return every runner."""
        with _database_errors():
            rows = self.connection.execute(
                f"SELECT {_RUNNER_COLUMNS} FROM runners"
            ).fetchall()
        return [_runner_from_row(row) for row in rows]

    def get_runners_by_country(self, country: str) -> list[Runner]:
        """Return up to ten active runners of a country, best personal best first."""
        with _database_errors():
            rows = self.connection.execute(
                f"SELECT {_RUNNER_COLUMNS} FROM runners "
                "WHERE country = ? AND is_active = ? "
                "ORDER BY personal_best IS NULL, personal_best LIMIT ?",
                (country, True, _BATCH_LIMIT),
            ).fetchall()
        return [_runner_from_row(row) for row in rows]

    def get_runners_by_year(self, year: int) -> list[Runner]:
        """Return up to ten runners with the best results of ``year``.

        The season best of each runner is their best result in that year.
        """
        with _database_errors():
            rows = self.connection.execute(
                "SELECT runners.id, runners.first_name, runners.last_name, runners.age, "
                "runners.is_active, runners.country, runners.personal_best, "
                "best.race_result "
                "FROM runners INNER JOIN ("
                "SELECT runner_id, MIN(race_result) AS race_result FROM results "
                "WHERE year = ? GROUP BY runner_id"
                ") AS best ON runners.id = best.runner_id "
                "ORDER BY best.race_result LIMIT ?",
                (year, _BATCH_LIMIT),
            ).fetchall()
        return [_runner_from_row(row) for row in rows]