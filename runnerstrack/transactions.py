"""Transactions spanning the runners and results repositories."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from .results_repository import ResultsRepository
from .runners_repository import RunnersRepository


def begin_transaction(
    runners_repository: RunnersRepository, results_repository: ResultsRepository
) -> None:
    """Start a transaction and attach it to both repositories.

    Database errors raised while starting it are passed on unchanged.
    """
    connection = results_repository.connection
    connection.execute("BEGIN")
    runners_repository.transaction = connection
    results_repository.transaction = connection


def _detach(
    runners_repository: RunnersRepository, results_repository: ResultsRepository
) -> sqlite3.Connection:
    transaction = runners_repository.transaction
    if transaction is None:
        raise RuntimeError("no transaction in progress")
    runners_repository.transaction = None
    results_repository.transaction = None
    return transaction


def commit_transaction(
    runners_repository: RunnersRepository, results_repository: ResultsRepository
) -> None:
    """Commit the current transaction and detach it from both repositories."""
    _detach(runners_repository, results_repository).commit()


def rollback_transaction(
    runners_repository: RunnersRepository, results_repository: ResultsRepository
) -> None:
    """Roll back the current transaction and detach it from both repositories."""
    _detach(runners_repository, results_repository).rollback()


@contextmanager
def transaction(
    runners_repository: RunnersRepository, results_repository: ResultsRepository
) -> Iterator[None]:
    """Run the block in a transaction: commit on success, roll back on error."""
    begin_transaction(runners_repository, results_repository)
    try:
        yield
    except BaseException:
        rollback_transaction(runners_repository, results_repository)
        raise
    commit_transaction(runners_repository, results_repository)