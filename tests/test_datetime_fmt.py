from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from nbtemplate.utils.datetime_fmt import Moment, format_datetime, moment

WHEN = datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=2)))


def test_default_format_is_iso_like() -> None:
    assert format_datetime(WHEN) == "2024-01-02T15:04:05+02:00"


@pytest.mark.parametrize(
    ("fmt", "expected"),
    [
        ("YYYY-MM-DD", "2024-01-02"),
        ("YY M D", "24 1 2"),
        ("HH:mm:ss", "15:04:05"),
        ("h:mm A", "3:04 PM"),
        ("hh a", "03 pm"),
        ("Do", "2nd"),
        ("ZZ", "+0200"),
        ("[Week of] YYYY", "Week of 2024"),
    ],
)
def test_format_tokens(fmt: str, expected: str) -> None:
    assert format_datetime(WHEN, fmt) == expected


@pytest.mark.parametrize(
    ("day", "expected"),
    [(1, "1st"), (3, "3rd"), (11, "11th"), (12, "12th"), (22, "22nd"), (31, "31st")],
)
def test_ordinal_days(day: int, expected: str) -> None:
    assert format_datetime(WHEN.replace(day=day), "Do") == expected


def test_moment_parses_iso_strings() -> None:
    parsed = moment("2024-01-02T15:04:05+02:00")
    assert parsed.to_datetime() == WHEN


def test_moment_from_plain_date_is_local_midnight() -> None:
    parsed = moment(date(2024, 5, 6))
    assert parsed.format("YYYY-MM-DD HH:mm") == "2024-05-06 00:00"
    assert parsed.to_datetime().tzinfo is not None


def test_moment_without_argument_is_now() -> None:
    before = datetime.now().astimezone()
    current = moment().to_datetime()
    assert abs(current - before) < timedelta(seconds=5)


def test_add_and_subtract() -> None:
    base = Moment(WHEN)
    assert base.add(1, "day").format("YYYY-MM-DD") == "2024-01-03"
    assert base.subtract(2, "weeks").format("YYYY-MM-DD") == "2023-12-19"
    assert base.add(30, "m").format("HH:mm") == "15:34"


def test_month_and_year_arithmetic_follows_calendar() -> None:
    end_of_january = moment("2024-01-31")
    assert end_of_january.add(1, "month").format("YYYY-MM-DD") == "2024-02-29"
    assert end_of_january.subtract(1, "year").format("YYYY-MM-DD") == "2023-01-31"
    assert Moment(WHEN).add(2, "M").format("YYYY-MM") == "2024-03"


def test_unsupported_unit_raises() -> None:
    with pytest.raises(ValueError, match="Unsupported unit"):
        Moment(WHEN).add(1, "quarters")


def test_moment_parses_non_iso_strings() -> None:
    parsed = moment("Jan 31 2024 10:30")
    assert parsed.format("YYYY-MM-DD HH:mm") == "2024-01-31 10:30"
    assert parsed.to_datetime().tzinfo is not None


def test_invalid_string_raises() -> None:
    with pytest.raises(ValueError, match="Invalid date"):
        moment("not a date")
