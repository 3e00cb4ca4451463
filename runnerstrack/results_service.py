"""Business rules for recording and removing race results."""

from __future__ import annotations

import re
import sqlite3
from datetime import date, timedelta
from http import HTTPStatus

from .models import ResponseError, Result
from .results_repository import ResultsRepository
from .runners_repository import RunnersRepository
from .transactions import (
    begin_transaction,
    commit_transaction,
    rollback_transaction,
)

_BAD_REQUEST = int(HTTPStatus.BAD_REQUEST)
_INTERNAL_ERROR = int(HTTPStatus.INTERNAL_SERVER_ERROR)
_COMPONENT = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")


def parse_race_result(time_string: str) -> timedelta:
    """Parse an ``HH:MM:SS`` race result into a duration.

    Raises ValueError when the text is too short or a part is not a number.
    """
    if len(time_string) < 8:
        raise ValueError(f"race result too short: {time_string!r}")
    hours, minutes, seconds = time_string[0:2], time_string[3:5], time_string[6:8]
    negative = False
    if hours[0] in "+-":
        negative = hours[0] == "-"
        hours = hours[1:]
    for part in (hours, minutes, seconds):
        if not _COMPONENT.fullmatch(part):
            raise ValueError(f"invalid race result: {time_string!r}")
    duration = timedelta(
        hours=float(hours), minutes=float(minutes), seconds=float(seconds)
    )
    return -duration if negative else duration


def _validate_result(result: Result) -> None:
    if not result.runner_id:
        raise ResponseError("Invalid RunnerID", _BAD_REQUEST)
    if not result.race_result:
        raise ResponseError("Invalid Race Results", _BAD_REQUEST)
    if not result.location:
        raise ResponseError("Invalid Location", _BAD_REQUEST)
    if result.position < 0:
        raise ResponseError("Invalid Position", _BAD_REQUEST)
    if result.id == " ":
        raise ResponseError("Invalid ID", _BAD_REQUEST)
    if result.year < 0 or result.year > date.today().year:
        raise ResponseError("Invalid Year", _BAD_REQUEST)


def _parse_stored(time_string: str) -> timedelta:
    try:
        return parse_race_result(time_string)
    except ValueError as exc:
        raise ResponseError("Failed to parse", _INTERNAL_ERROR) from exc


class ResultsService:
    """Records results and keeps each runner's best times up to date."""

    def __init__(
        self,
        runners_repository: RunnersRepository,
        results_repository: ResultsRepository,
    ) -> None:
        self.runners_repository = runners_repository
        self.results_repository = results_repository

    def create_result(self, result: Result) -> Result:
        """Validate and store a result, then update the runner's best times."""
        _validate_result(result)
        try:
            race_result = parse_race_result(result.race_result)
        except ValueError as exc:
            raise ResponseError("Invalid Race Result", _BAD_REQUEST) from exc

        created = self.results_repository.create_result(result)
        runner = self.runners_repository.get_runner(result.runner_id)

        if not runner.personal_best:
            runner.personal_best = result.race_result
        elif _parse_stored(runner.personal_best) > race_result:
            runner.personal_best = result.race_result

        if not runner.season_best:
            runner.season_best = result.race_result
        elif race_result < _parse_stored(runner.season_best):
            runner.season_best = result.race_result

        self.runners_repository.update_runner_results(runner)
        return created

    def delete_result(self, result_id: str) -> None:
        """Delete a result and recompute the runner's best times, atomically."""
        if not result_id:
            raise ResponseError("invalid resultID", _BAD_REQUEST)
        try:
            begin_transaction(self.runners_repository, self.results_repository)
        except sqlite3.Error as exc:
            raise ResponseError("Failed to start transaction", _BAD_REQUEST) from exc

        try:
            self._remove_and_recompute(result_id)
        except BaseException:
            rollback_transaction(self.runners_repository, self.results_repository)
            raise
        commit_transaction(self.runners_repository, self.results_repository)

    def _remove_and_recompute(self, result_id: str) -> None:
        result = self.results_repository.delete_result(result_id)
        runner = self.runners_repository.get_runner(result.runner_id)

        if runner.personal_best == result.race_result:
            runner.personal_best = self.results_repository.get_personal_best_results(
                result.runner_id
            )

        this_year = date.today().year
        if runner.season_best == result.race_result and result.year == this_year:
            runner.season_best = self.results_repository.get_season_best_results(
                result.runner_id, this_year
            )

        self.runners_repository.update_runner_results(runner)