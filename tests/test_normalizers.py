from datetime import date, datetime, time

import pytest

from timebank.data_imports.modules.normalizers import normalize_date, normalize_time
from timebank.pydantic_models.data.cell_value import (
    DateCell,
    EmptyCell,
    NumberCell,
    TextCell,
    cell_from_raw,
)


def test_cell_classification():
    assert isinstance(cell_from_raw(None), EmptyCell)
    assert isinstance(cell_from_raw("   "), EmptyCell)
    assert isinstance(cell_from_raw(float("nan")), EmptyCell)
    assert isinstance(cell_from_raw("09:00"), TextCell)
    assert isinstance(cell_from_raw(0), NumberCell)
    assert isinstance(cell_from_raw(0.375), NumberCell)
    assert isinstance(cell_from_raw(True), TextCell)
    assert isinstance(cell_from_raw(date(2024, 1, 15)), DateCell)
    assert isinstance(cell_from_raw(time(9, 0)), DateCell)


@pytest.mark.parametrize(
    "value",
    ["2024-01-15", "15/01/2024", "15-01-2024", " 15/1/2024 ", "2024-01-15 "],
)
def test_normalize_date_text(value):
    assert normalize_date(value) == "2024-01-15"


def test_normalize_date_pads_components():
    assert normalize_date("5/3/2024") == "2024-03-05"


@pytest.mark.parametrize(
    "value",
    ["not-a-date", "2024/01/15", "31/02/2024", "2024-13-01", "", None, "15.01.2024", True],
)
def test_normalize_date_rejects(value):
    assert normalize_date(value) is None


def test_normalize_date_spreadsheet_serial():
    assert normalize_date(45306) == "2024-01-15"
    assert normalize_date(45306.75) == "2024-01-15"


def test_normalize_date_serial_out_of_range():
    assert normalize_date(0.5) is None
    assert normalize_date(-3) is None
    assert normalize_date(1e12) is None


def test_normalize_date_native():
    assert normalize_date(date(2024, 1, 15)) == "2024-01-15"
    assert normalize_date(datetime(2024, 1, 15, 23, 59)) == "2024-01-15"
    assert normalize_date(time(9, 0)) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("09:00", "09:00"),
        ("9:00", "09:00"),
        (" 8:05 ", "08:05"),
        ("23:59", "23:59"),
        (0.375, "09:00"),
        (0.5, "12:00"),
        (0, "00:00"),
        (0.7291666, "17:30"),
        (time(13, 45), "13:45"),
        (datetime(2024, 1, 15, 18, 0), "18:00"),
    ],
)
def test_normalize_time(value, expected):
    assert normalize_time(value) == expected


@pytest.mark.parametrize(
    "value",
    ["9:0", "09:000", "24:00", "12:60", "9h", "", None, 1.0, -0.1, date(2024, 1, 15)],
)
def test_normalize_time_rejects(value):
    assert normalize_time(value) is None


def test_huge_integers_are_not_numbers():
    assert isinstance(cell_from_raw(10**400), TextCell)
    assert normalize_date(10**400) is None
    assert normalize_time(10**400) is None


def test_fraction_rounding_to_midnight_is_rejected():
    assert normalize_time(0.9999) is None
    assert normalize_time(0.999) == "23:59"
