"""Date helper exposed to templates as ``moment``.

Formatting follows moment.js display tokens so templates can write
``<%= moment().format('YYYY-MM-DD') %>`` or ``<%= moment(date).format('dddd') %>``.
Text wrapped in square brackets is emitted literally.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Callable

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DEFAULT_FORMAT = "YYYY-MM-DDTHH:mm:ssZ"

_TOKEN_RE = re.compile(
    r"\[([^\]]*)\]|YYYY|YY|MMMM|MMM|MM|M|Do|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|A|a|ZZ|Z|X"
)

_UNITS = {
    "y": "years",
    "year": "years",
    "years": "years",
    "M": "months",
    "month": "months",
    "months": "months",
    "w": "weeks",
    "week": "weeks",
    "weeks": "weeks",
    "d": "days",
    "day": "days",
    "days": "days",
    "h": "hours",
    "hour": "hours",
    "hours": "hours",
    "m": "minutes",
    "minute": "minutes",
    "minutes": "minutes",
    "s": "seconds",
    "second": "seconds",
    "seconds": "seconds",
}


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def _utc_offset(dt: datetime, sep: str) -> str:
    offset = dt.utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds() // 60)
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{sep}{mins:02d}"


def _hour12(dt: datetime) -> int:
    return dt.hour % 12 or 12


_TOKENS: dict[str, Callable[[datetime], str]] = {
    "YYYY": lambda dt: f"{dt.year:04d}",
    "YY": lambda dt: f"{dt.year % 100:02d}",
    "MMMM": lambda dt: dt.strftime("%B"),
    "MMM": lambda dt: dt.strftime("%b"),
    "MM": lambda dt: f"{dt.month:02d}",
    "M": lambda dt: str(dt.month),
    "Do": lambda dt: _ordinal(dt.day),
    "DD": lambda dt: f"{dt.day:02d}",
    "D": lambda dt: str(dt.day),
    "dddd": lambda dt: dt.strftime("%A"),
    "ddd": lambda dt: dt.strftime("%a"),
    "HH": lambda dt: f"{dt.hour:02d}",
    "H": lambda dt: str(dt.hour),
    "hh": lambda dt: f"{_hour12(dt):02d}",
    "h": lambda dt: str(_hour12(dt)),
    "mm": lambda dt: f"{dt.minute:02d}",
    "m": lambda dt: str(dt.minute),
    "ss": lambda dt: f"{dt.second:02d}",
    "s": lambda dt: str(dt.second),
    "A": lambda dt: "PM" if dt.hour >= 12 else "AM",
    "a": lambda dt: "pm" if dt.hour >= 12 else "am",
    "ZZ": lambda dt: _utc_offset(dt, ""),
    "Z": lambda dt: _utc_offset(dt, ":"),
    "X": lambda dt: str(int(dt.timestamp())),
}


def format_datetime(dt: datetime, fmt: str = DEFAULT_FORMAT) -> str:
    """Format ``dt`` using moment.js style tokens."""

    def replace(match: re.Match[str]) -> str:
        literal = match.group(1)
        if literal is not None:
            return literal
        return _TOKENS[match.group(0)](dt)

    return _TOKEN_RE.sub(replace, fmt)


def parse_datetime(value: str) -> datetime:
    """Parse a date or datetime string into an aware ``datetime``.

    ISO 8601 is read as-is; other common forms (``Jan 31 2024``) go through
    the dateutil parser. Naive results are taken as local time.
    """

    text = value.strip()
    try:
        parsed = date_parser.isoparse(text)
    except ValueError:
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError) as exc:
            raise ValueError(
                f"Invalid date '{value}'. Use ISO 8601 like 2024-01-31 or "
                "2024-01-31T09:15:00."
            ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


class Moment:
    """Thin wrapper around an aware ``datetime`` with moment.js style methods."""

    __slots__ = ("_dt",)

    def __init__(self, dt: datetime) -> None:
        self._dt = dt

    @classmethod
    def now(cls) -> Moment:
        return cls(datetime.now().astimezone())

    def format(self, fmt: str | None = None) -> str:
        return format_datetime(self._dt, fmt or DEFAULT_FORMAT)

    def strftime(self, fmt: str) -> str:
        return self._dt.strftime(fmt)

    def add(self, amount: int | float, unit: str = "days") -> Moment:
        """Return a new ``Moment`` shifted forward, e.g. ``add(1, 'month')``.

        Months and years follow calendar rules: Jan 31 plus one month is the
        last day of February.
        """

        key = _UNITS.get(unit.strip())
        if key is None:
            raise ValueError(
                f"Unsupported unit '{unit}'. Use years, months, weeks, days, "
                "hours, minutes or seconds."
            )
        return Moment(self._dt + relativedelta(**{key: amount}))

    def subtract(self, amount: int | float, unit: str = "days") -> Moment:
        return self.add(-amount, unit)

    def to_datetime(self) -> datetime:
        return self._dt

    def isoformat(self) -> str:
        return self._dt.isoformat()

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Moment({self._dt.isoformat()!r})"


def moment(value: str | date | Moment | None = None) -> Moment:
    """Build a ``Moment`` from nothing (now), a string, a date or a datetime."""

    if value is None:
        return Moment.now()
    if isinstance(value, Moment):
        return Moment(value.to_datetime())
    if isinstance(value, datetime):
        return Moment(value if value.tzinfo else value.astimezone())
    if isinstance(value, date):
        return Moment(datetime(value.year, value.month, value.day).astimezone())
    if isinstance(value, str):
        return Moment(parse_datetime(value))
    raise TypeError(f"Cannot build a date from {type(value).__name__}")
