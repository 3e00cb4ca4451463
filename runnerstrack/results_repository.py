"""Storage of race results."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from http import HTTPStatus
from typing import Any

from .models import ResponseError, Result

_INTERNAL_ERROR = int(HTTPStatus.INTERNAL_SERVER_ERROR)


@contextmanager
def _database_errors() -> Iterator[None]:
    """Turn database failures into internal-server-error responses."""
    try:
        yield
    except sqlite3.Error as exc:
        raise ResponseError(str(exc), _INTERNAL_ERROR) from exc


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _number(value: Any) -> int:
    return 0 if value is None else int(value)


class ResultsRepository:
    """Reads and writes the ``results`` table.

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

    def create_result(self, result: Result) -> Result:
        """Store ``result`` and return it with the id the database gave it."""
        with _database_errors():
            cursor = self._active.execute(
                "INSERT INTO results(runner_id, race_result, location, position, year) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    result.runner_id,
                    result.race_result,
                    result.location,
                    result.position,
                    result.year,
                ),
            )
            self._finish_write()
        return Result(
            id=_text(cursor.lastrowid),
            runner_id=result.runner_id,
            race_result=result.race_result,
            location=result.location,
            position=result.position,
            year=result.year,
        )

    def delete_result(self, result_id: str) -> Result:
        """Delete a result and return its runner, race result and year.

        When no result has that id, only the id is filled in.
        """
        with _database_errors():
            row = self._active.execute(
                "SELECT runner_id, race_result, year FROM results WHERE id = ?",
                (result_id,),
            ).fetchone()
            self._active.execute("DELETE FROM results WHERE id = ?", (result_id,))
            self._finish_write()
        deleted = Result(id=result_id)
        if row is not None:
            runner_id, race_result, year = row
            deleted.runner_id = _text(runner_id)
            deleted.race_result = _text(race_result)
            deleted.year = _number(year)
        return deleted

    def get_all_runners_results(self, runner_id: str) -> list[Result]:
        """Return every result of the runner."""
        with _database_errors():
            rows = self.connection.execute(
                "SELECT id, race_result, location, position, year "
                "FROM results WHERE runner_id = ?",
                (runner_id,),
            ).fetchall()
        return [
            Result(
                id=_text(result_id),
                runner_id=runner_id,
                race_result=_text(race_result),
                location=_text(location),
                position=_number(position),
                year=_number(year),
            )
            for result_id, race_result, location, position, year in rows
        ]

    def get_personal_best_results(self, runner_id: str) -> str:
        """Return the runner's best race result ever, or "" if there is none."""
        with _database_errors():
            row = self.connection.execute(
                "SELECT MIN(race_result) FROM results WHERE runner_id = ?",
                (runner_id,),
            ).fetchone()
        return "" if row is None else _text(row[0])

    def get_season_best_results(self, runner_id: str, year: int) -> str:
        """Return the runner's best race result in ``year``, or "" if there is none."""
        with _database_errors():
            row = self.connection.execute(
                "SELECT MIN(race_result) FROM results WHERE runner_id = ? AND year = ?",
                (runner_id, year),
            ).fetchone()
        return "" if row is None else _text(row[0])