from datetime import date, datetime
from decimal import Decimal

import pytest

from staycore_backend.derive.money import InvalidAmount, parse_amount, percent
from staycore_backend.derive.periods import add_period, parse_date, week_window
from staycore_backend.errors import ValidationError


@pytest.mark.parametrize("value, expected", [
    ("12.345", Decimal("12.35")),
    ("$1,000", Decimal("1000.00")),
    (7, Decimal("7.00")),
])
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", [None, True, "", "ten", "-1", "NaN", float("inf")])
def test_parse_amount_rejects(value):
    with pytest.raises(InvalidAmount):
        parse_amount(value)


def test_percent_guards_zero_denominator():
    assert percent(5, 0) == 0.0
    assert percent(1, 3) == 33.33
    assert percent(2, 3) == 66.67


def test_parse_date_accepts_strings_and_datetimes():
    assert parse_date("2024-06-10") == date(2024, 6, 10)
    assert parse_date("2024-06-10T23:15:00Z") == date(2024, 6, 10)
    assert parse_date(datetime(2024, 6, 10, 8)) == date(2024, 6, 10)
    with pytest.raises(ValueError):
        parse_date("next tuesday")


def test_week_window_is_sunday_to_saturday():
    assert week_window(date(2024, 6, 9)) == (date(2024, 6, 9), date(2024, 6, 15))
    assert week_window(date(2024, 6, 15)) == (date(2024, 6, 9), date(2024, 6, 15))


def test_add_period():
    assert add_period("2023-01-31", "monthly") == date(2023, 2, 28)
    with pytest.raises(ValidationError):
        add_period("2023-01-31", "yearly")
