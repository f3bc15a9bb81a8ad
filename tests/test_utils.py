"""Tests for utility helpers."""

from __future__ import annotations

import datetime

import pytest

from spec_algebra import add_months, cast_value


@pytest.mark.parametrize(
    ("moment", "months", "expected"),
    [
        (datetime.date(2024, 6, 15), -6, datetime.date(2023, 12, 15)),
        (datetime.date(2024, 3, 31), -1, datetime.date(2024, 2, 29)),
        (datetime.date(2023, 3, 31), -1, datetime.date(2023, 2, 28)),
        (datetime.date(2024, 1, 31), 1, datetime.date(2024, 2, 29)),
        (datetime.date(2024, 11, 30), 3, datetime.date(2025, 2, 28)),
        (datetime.date(2024, 6, 15), 0, datetime.date(2024, 6, 15)),
    ],
)
def test_add_months(moment, months, expected):
    assert add_months(moment, months) == expected


def test_add_months_keeps_time_and_tz():
    moment = datetime.datetime(2024, 6, 15, 12, 30, tzinfo=datetime.timezone.utc)
    result = add_months(moment, -20)
    assert result == datetime.datetime(
        2022, 10, 15, 12, 30, tzinfo=datetime.timezone.utc
    )


def test_cast_value():
    assert cast_value("8", "int") == 8
    assert cast_value(["1", "2"], "float") == [1.0, 2.0]
    assert cast_value("yes", "bool") is True
    assert cast_value("2024-06-15", "date") == datetime.date(2024, 6, 15)
    assert cast_value("2024-06-15T12:00:00Z", "datetime") == datetime.datetime(
        2024, 6, 15, 12, tzinfo=datetime.timezone.utc
    )
    assert cast_value(" True ", "boolean") is True
    assert cast_value("2024-06-15T14:00:00+02:00", "datetime") == datetime.datetime(
        2024, 6, 15, 12, tzinfo=datetime.timezone.utc
    )


def test_cast_value_passes_through_failures():
    assert cast_value("abc", "int") == "abc"
    assert cast_value("x", None) == "x"
    assert cast_value("x", "unknown") == "x"
    assert cast_value("x", "uuid") == "x"
