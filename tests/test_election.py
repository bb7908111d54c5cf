"""Tests for the election results model and its soft validation."""

import json

import pytest
from pydantic import ValidationError

from src.models.election import (
    ElectionResult,
    ElectionResultsData,
    check_percentage_total,
    percentage_total,
)


def _make_results(*percentages: float) -> list:
    return [
        ElectionResult(candidate=f"Candidat {i}", party=f"P{i}", percentage=p)
        for i, p in enumerate(percentages, start=1)
    ]


def test_total_within_tolerance_has_no_warning() -> None:
    assert check_percentage_total(_make_results(58.5, 41.5)) is None
    assert check_percentage_total(_make_results(50, 46)) is None
    assert check_percentage_total(_make_results(60, 45)) is None


def test_total_outside_tolerance_warns() -> None:
    warning = check_percentage_total(_make_results(40, 40, 10))
    assert warning is not None
    assert "90.0%" in warning


def test_empty_results_are_not_checked() -> None:
    assert check_percentage_total([]) is None


def test_percentage_total_is_rounded() -> None:
    assert percentage_total(_make_results(33.333, 33.333, 33.333)) == 100.0


def test_percentage_bounds() -> None:
    with pytest.raises(ValidationError):
        ElectionResult(candidate="A", party="P", percentage=101)
    with pytest.raises(ValidationError):
        ElectionResult(candidate="A", party="P", percentage=-1)


def test_to_json_uses_camel_case_keys() -> None:
    data = ElectionResultsData(
        title="Présidentielle 2022 - second tour",
        date="2022-04-24",
        type="presidential",
        round=2,
        total_votes=35000000,
        results=_make_results(58.5, 41.5),
        display_type="pie",
    )

    decoded = json.loads(data.to_json())

    assert decoded["totalVotes"] == 35000000
    assert decoded["displayType"] == "pie"
    assert "location" not in decoded
    assert decoded["results"][0]["color"] == "#6366f1"


def test_results_accept_camel_case_input() -> None:
    data = ElectionResultsData.model_validate({
        "title": "Législatives",
        "date": "2024-07-07",
        "type": "legislative",
        "totalVotes": 1000,
        "displayType": "bar",
        "results": [{"candidate": "A", "party": "P", "percentage": 100}],
    })

    assert data.total_votes == 1000


def test_display_type_is_closed() -> None:
    with pytest.raises(ValidationError):
        ElectionResultsData(
            title="x", date="2024-01-01", type="local",
            results=_make_results(100), display_type="map",
        )
