"""HTTP handlers for runners and results."""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Any, TypeVar

from flask import Response, jsonify, request

from .models import ResponseError, Result, Runner
from .results_service import ResultsService
from .runners_service import RunnersService

logger = logging.getLogger(__name__)

_OK = int(HTTPStatus.OK)
_NO_CONTENT = int(HTTPStatus.NO_CONTENT)
_INTERNAL_ERROR = int(HTTPStatus.INTERNAL_SERVER_ERROR)

_Model = TypeVar("_Model", Runner, Result)


class _BadBody(Exception):
    """The request body could not be decoded."""


def _decode(model: type[_Model], what: str) -> _Model:
    raw = request.get_data()
    try:
        data = json.loads(raw)
        return model.from_dict({} if data is None else data)
    except ValueError as exc:
        logger.warning("Error while decoding %s request body: %s", what, exc)
        raise _BadBody(str(exc)) from exc


def _json(payload: Any, status: int = _OK) -> Response:
    response = jsonify(payload)
    response.status_code = status
    return response


def _error(error: ResponseError, status: int | None = None) -> Response:
    return _json(error.to_dict(), error.status if status is None else status)


def _empty(status: int) -> Response:
    return Response(status=status)


class RunnersController:
    """Handlers for the runner endpoints."""

    def __init__(self, runners_service: RunnersService) -> None:
        self.runners_service = runners_service

    def create_runner(self) -> Response:
        try:
            runner = _decode(Runner, "create runner")
        except _BadBody:
            return _empty(_INTERNAL_ERROR)
        try:
            created = self.runners_service.create_runner(runner)
        except ResponseError as exc:
            logger.warning("Error while creating runner: %s", exc.message)
            return _error(exc, _INTERNAL_ERROR)
        return _json(created.to_dict())

    def update_runner(self) -> Response:
        try:
            runner = _decode(Runner, "update runner")
        except _BadBody:
            return _empty(_INTERNAL_ERROR)
        try:
            self.runners_service.update_runner(runner)
        except ResponseError as exc:
            return _error(exc)
        return _empty(_NO_CONTENT)

    def delete_runner(self, runner_id: str) -> Response:
        try:
            self.runners_service.delete_runner(runner_id)
        except ResponseError as exc:
            return _error(exc)
        return _empty(_NO_CONTENT)

    def get_runner(self, runner_id: str) -> Response:
        try:
            runner = self.runners_service.get_runner(runner_id)
        except ResponseError as exc:
            logger.warning("Error while getting runner %s: %s", runner_id, exc.message)
            return _error(exc)
        return _json(runner.to_dict())

    def get_runners_batch(self) -> Response:
        country = request.args.get("country", "")
        year = request.args.get("year", "")
        try:
            runners = self.runners_service.get_runners_batch(country, year)
        except ResponseError as exc:
            return _error(exc)
        return _json([runner.to_dict() for runner in runners])


class ResultsController:
    """Handlers for the result endpoints."""

    def __init__(self, results_service: ResultsService) -> None:
        self.results_service = results_service

    def create_result(self) -> Response:
        try:
            result = _decode(Result, "create result")
        except _BadBody:
            return _empty(_INTERNAL_ERROR)
        try:
            created = self.results_service.create_result(result)
        except ResponseError as exc:
            return _error(exc)
        return _json(created.to_dict())

    def delete_result(self, result_id: str) -> Response:
        try:
            self.results_service.delete_result(result_id)
        except ResponseError as exc:
            return _error(exc)
        return _empty(_NO_CONTENT)