import pytest

from runnerstrack.models import ResponseError, Result, Runner


def test_response_error_body_omits_status():
    err = ResponseError("Invalid ID", 400)
    assert err.to_dict() == {"message": "Invalid ID"}
    assert err.status == 400
    assert str(err) == "Invalid ID"


def test_response_error_is_raisable_and_comparable():
    with pytest.raises(ResponseError) as info:
        raise ResponseError("No user found", 500)
    assert info.value == ResponseError("No user found", 500)
    assert info.value != ResponseError("No user found", 400)


def test_result_round_trip():
    result = Result("7", "3", "02:10:05", "Berlin", 2, 2020)
    assert Result.from_dict(result.to_dict()) == result


def test_result_dict_keys():
    assert set(Result().to_dict()) == {
        "id", "runner_id", "race_result", "location", "position", "year",
    }


def test_result_missing_fields_default():
    result = Result.from_dict({"runner_id": "3"})
    assert result == Result(runner_id="3")


def test_result_ignores_unknown_keys():
    assert Result.from_dict({"id": "1", "extra": 5}) == Result(id="1")


@pytest.mark.parametrize(
    "data",
    [
        {"position": "first"},
        {"year": 2020.5},
        {"position": True},
        {"id": 5},
        [1, 2],
    ],
)
def test_result_rejects_bad_types(data):
    with pytest.raises(ValueError):
        Result.from_dict(data)


def test_result_accepts_integral_float():
    assert Result.from_dict({"year": 2020.0}).year == 2020


def test_runner_omits_empty_optional_fields():
    runner = Runner(id="1", first_name="John", last_name="Smith", country="US")
    assert runner.to_dict() == {
        "id": "1",
        "first_name": "John",
        "last_name": "Smith",
        "country": "US",
    }


def test_runner_keeps_required_fields_even_when_empty():
    data = Runner().to_dict()
    assert data["id"] == "" and data["first_name"] == "" and data["country"] == ""
    assert "age" not in data and "results" not in data


def test_runner_round_trip_with_results():
    runner = Runner(
        id="1",
        first_name="John",
        last_name="Smith",
        age=30,
        is_active=True,
        country="US",
        personal_best="02:00:30",
        season_best="02:13:03",
        results=[Result("9", "1", "02:13:03", "Boston", 4, 2021)],
    )
    data = runner.to_dict()
    assert data["results"] == [runner.results[0].to_dict()]
    assert Runner.from_dict(data) == runner


def test_runner_null_results_becomes_empty_list():
    assert Runner.from_dict({"results": None}).results == []


@pytest.mark.parametrize(
    "data",
    [
        {"is_active": "yes"},
        {"age": "40"},
        {"results": "none"},
        {"results": [{"year": "x"}]},
        "runner",
    ],
)
def test_runner_rejects_bad_types(data):
    with pytest.raises(ValueError):
        Runner.from_dict(data)