import pytest

from timebank.ledger.modules.time_calculations import (
    compute_balance,
    compute_worked_hours,
    format_date,
    format_hours,
    parse_time_to_minutes,
)


def test_parse_time_to_minutes():
    assert parse_time_to_minutes("00:00") == 0
    assert parse_time_to_minutes("09:30") == 570
    assert parse_time_to_minutes("9:05") == 545
    assert parse_time_to_minutes("23:59") == 1439


def test_parse_time_to_minutes_rejects_garbage():
    with pytest.raises(ValueError):
        parse_time_to_minutes("9h30")


def test_worked_hours_without_lunch_is_exact_span():
    assert compute_worked_hours("09:00", "17:30") == 8.5
    assert compute_worked_hours("08:15", "08:15") == 0.0


def test_worked_hours_subtracts_lunch():
    assert compute_worked_hours("09:00", "18:00", "12:00", "13:00") == 8.0


def test_worked_hours_ignores_half_lunch_pair():
    assert compute_worked_hours("09:00", "18:00", "12:00", None) == 9.0


def test_worked_hours_clamps_overnight_to_zero():
    assert compute_worked_hours("18:00", "09:00") == 0.0
    assert compute_worked_hours("09:00", "10:00", "09:00", "12:00") == 0.0


def test_balance_is_signed():
    assert compute_balance(8.5, 8) == 0.5
    assert compute_balance(6.0, 8) == -2.0


@pytest.mark.parametrize(
    "hours, expected",
    [
        (8.5, "08:30"),
        (-1.25, "-01:15"),
        (0, "00:00"),
        (7.999999, "08:00"),
        (-7.999999, "-08:00"),
        (-0.0001, "00:00"),
        (123.5, "123:30"),
    ],
)
def test_format_hours(hours, expected):
    assert format_hours(hours) == expected


def test_format_date():
    assert format_date("2024-01-15") == "15/01/2024"
