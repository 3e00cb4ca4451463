"""Domain objects exchanged between the HTTP layer, services and storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ResponseError(Exception):
    """An error carrying the message shown to clients and an HTTP status."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body for this error; the status is not part of it."""
        return {"message": self.message}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResponseError):
            return NotImplemented
        return (self.message, self.status) == (other.message, other.status)

    def __hash__(self) -> int:
        return hash((self.message, self.status))

    def __repr__(self) -> str:
        return f"ResponseError(message={self.message!r}, status={self.status!r})"


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"cannot decode {what} from {type(data).__name__}")
    return data


def _get_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _get_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"field {key!r} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"field {key!r} must be an integer")


def _get_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {key!r} must be a boolean")
    return value


@dataclass
class Result:
    """A single race result of a runner."""

    id: str = ""
    runner_id: str = ""
    race_result: str = ""
    location: str = ""
    position: int = 0
    year: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "runner_id": self.runner_id,
            "race_result": self.race_result,
            "location": self.location,
            "position": self.position,
            "year": self.year,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Result:
        """Build a result from decoded JSON; unknown keys are ignored."""
        data = _require_mapping(data, "result")
        return cls(
            id=_get_str(data, "id"),
            runner_id=_get_str(data, "runner_id"),
            race_result=_get_str(data, "race_result"),
            location=_get_str(data, "location"),
            position=_get_int(data, "position"),
            year=_get_int(data, "year"),
        )


@dataclass
class Runner:
    """A runner with optional best times and results."""

    id: str = ""
    first_name: str = ""
    last_name: str = ""
    age: int = 0
    is_active: bool = False
    country: str = ""
    personal_best: str = ""
    season_best: str = ""
    results: list[Result] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; empty optional fields are left out."""
        data: dict[str, Any] = {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }
        if self.age:
            data["age"] = self.age
        if self.is_active:
            data["is_active"] = self.is_active
        data["country"] = self.country
        if self.personal_best:
            data["personal_best"] = self.personal_best
        if self.season_best:
            data["season_best"] = self.season_best
        if self.results:
            data["results"] = [result.to_dict() for result in self.results]
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Runner:
        """Build a runner from decoded JSON; unknown keys are ignored."""
        data = _require_mapping(data, "runner")
        raw_results = data.get("results")
        if raw_results is None:
            results: list[Result] = []
        elif isinstance(raw_results, list):
            results = [Result.from_dict(item) for item in raw_results]
        else:
            raise ValueError("field 'results' must be a list")
        return cls(
            id=_get_str(data, "id"),
            first_name=_get_str(data, "first_name"),
            last_name=_get_str(data, "last_name"),
            age=_get_int(data, "age"),
            is_active=_get_bool(data, "is_active"),
            country=_get_str(data, "country"),
            personal_best=_get_str(data, "personal_best"),
            season_best=_get_str(data, "season_best"),
            results=results,
        )