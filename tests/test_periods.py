from datetime import date, datetime, timedelta, timezone

import pytest

from transaction_analyzer.periods import matches_calendar, parse_amount, parse_datetime


def test_parse_datetime_accepts_iso_and_common_formats():
    assert parse_datetime("2024-03-05") == datetime(2024, 3, 5)
    assert parse_datetime(" 2024-03-05T10:30:00 ") == datetime(2024, 3, 5, 10, 30)
    assert parse_datetime("2024/03/05") == datetime(2024, 3, 5)
    assert parse_datetime("03/05/2024") == datetime(2024, 3, 5)
    assert parse_datetime("5 Mar 2024") == datetime(2024, 3, 5)
    assert parse_datetime("Mar 5, 2024") == datetime(2024, 3, 5)


def test_parse_datetime_normalises_timezones_to_naive_utc():
    assert parse_datetime("2024-03-05T10:00:00Z") == datetime(2024, 3, 5, 10)
    assert parse_datetime("2024-03-05T10:00:00+02:00") == datetime(2024, 3, 5, 8)
    aware = datetime(2024, 3, 5, 1, tzinfo=timezone(timedelta(hours=3)))
    assert parse_datetime(aware) == datetime(2024, 3, 4, 22)


def test_parse_datetime_turns_dates_into_midnight():
    assert parse_datetime(date(2024, 3, 5)) == datetime(2024, 3, 5)


@pytest.mark.parametrize("value", ["", "not a date", "2024-13-01", None, 20240305])
def test_parse_datetime_rejects_unparsable_values(value):
    with pytest.raises(ValueError):
        parse_datetime(value)


def test_parse_amount_accepts_numbers_and_numeric_strings():
    assert parse_amount(12) == 12.0
    assert parse_amount(-3.5) == -3.5
    assert parse_amount(" 100 ") == 100.0
    assert parse_amount("1,234.50") == 1234.5
    assert parse_amount("-12,345,678") == -12345678.0
    assert parse_amount("+.5") == 0.5
    assert parse_amount("1e3") == 1000.0


@pytest.mark.parametrize(
    "value",
    ["", "abc", "nan", "inf", "1e400", "12,50", "1,2,3", "1234,567", "1_000", None, True, [1], 10**400],
)
def test_parse_amount_rejects_unparsable_values(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_matches_calendar_only_checks_given_components():
    when = datetime(2024, 3, 5)

    assert matches_calendar(when)
    assert matches_calendar(when, year=2024)
    assert matches_calendar(when, month=3, day=5)
    assert not matches_calendar(when, 2024, 4)
    assert not matches_calendar(None, year=2024)
    assert matches_calendar(None)
