"""Business rules for creating, changing and listing runners."""

from __future__ import annotations

import re
from datetime import date
from http import HTTPStatus

from .models import ResponseError, Runner
from .results_repository import ResultsRepository
from .runners_repository import RunnersRepository

_BAD_REQUEST = int(HTTPStatus.BAD_REQUEST)
_MIN_AGE = 16
_MAX_AGE = 125
_INTEGER = re.compile(r"[+-]?[0-9]+")


def validate_runner(runner: Runner) -> None:
    """Raise a bad-request ResponseError when the runner's data is not acceptable."""
    if not runner.first_name:
        raise ResponseError("Invalid first name", _BAD_REQUEST)
    if not runner.last_name:
        raise ResponseError("Invalid last name", _BAD_REQUEST)
    if not _MIN_AGE <= runner.age <= _MAX_AGE:
        raise ResponseError("Invalid age", _BAD_REQUEST)


def validate_runner_id(runner_id: str) -> None:
    """Raise a bad-request ResponseError when the id is empty."""
    if not runner_id:
        raise ResponseError("Invalid ID", _BAD_REQUEST)


def _parse_year(year: str) -> int:
    if not _INTEGER.fullmatch(year):
        raise ResponseError("Invalid integer", _BAD_REQUEST)
    value = int(year)
    if value < 0 or value > date.today().year:
        raise ResponseError("Invalid year", _BAD_REQUEST)
    return value


class RunnersService:
    """Validates requests about runners and passes them to storage."""

    def __init__(
        self,
        runners_repository: RunnersRepository,
        results_repository: ResultsRepository | None,
    ) -> None:
        self.runners_repository = runners_repository
        self.results_repository = results_repository

    def create_runner(self, runner: Runner) -> Runner:
        """Validate and store a new runner."""
        validate_runner(runner)
        return self.runners_repository.create_runner(runner)

    def update_runner(self, runner: Runner) -> None:
        """Validate and update an existing runner."""
        validate_runner_id(runner.id)
        validate_runner(runner)
        self.runners_repository.update_runner(runner)

    def delete_runner(self, runner_id: str) -> None:
        """Mark the runner as inactive."""
        validate_runner_id(runner_id)
        self.runners_repository.delete_runner(runner_id)

    def get_runner(self, runner_id: str) -> Runner:
        """Return the runner together with all of their results."""
        validate_runner_id(runner_id)
        runner = self.runners_repository.get_runner(runner_id)
        if self.results_repository is None:
            raise RuntimeError("results repository is not configured")
        runner.results = self.results_repository.get_all_runners_results(runner.id)
        return runner

    def get_runners_batch(self, country: str, year: str) -> list[Runner]:
        """List runners by country, by year, or all of them.

        When both or neither filter is given, every runner is returned.
        """
        if country and year:
            return self.runners_repository.get_all_runners()
        if country:
            return self.runners_repository.get_runners_by_country(country)
        if year:
            return self.runners_repository.get_runners_by_year(_parse_year(year))
        return self.runners_repository.get_all_runners()