"""Calendar Dates — strict YYYY-MM-DD parsing without regular expressions.

Invariants:
    - Accepts exactly 10 characters: 4 digits, '-', 2 digits, '-', 2 digits
    - Month 1–12; day 1..days_in_month (Gregorian leap rule)
    - Returns None for anything invalid (never raises)
    - Comparison is by calendar day only; time-of-day never enters

Design Decisions:
    - Own leap/month-length check instead of datetime.date.fromisoformat():
      fromisoformat also accepts compact and week-date forms (20250101, 2025-W01-1)
    - CalendarDay is a (year, month, day) tuple, not datetime.date: year 0000 is
      syntactically valid here but below datetime.MINYEAR
"""

from datetime import date
from typing import NamedTuple

from paymentflow.core.validate_fields import is_digit_string


_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


class CalendarDay(NamedTuple):
    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> "CalendarDay":
        return cls(value.year, value.month, value.day)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def parse_calendar_date(value: str) -> CalendarDay | None:
    """Parse a strict YYYY-MM-DD string. Returns None when invalid."""
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        return None
    year_s, month_s, day_s = value[0:4], value[5:7], value[8:10]
    if not (is_digit_string(year_s) and is_digit_string(month_s)
            and is_digit_string(day_s)):
        return None

    year, month, day = int(year_s), int(month_s), int(day_s)
    if not 1 <= month <= 12:
        return None
    if not 1 <= day <= days_in_month(year, month):
        return None
    return CalendarDay(year, month, day)


def is_future_date(value: CalendarDay, today: date) -> bool:
    """Strictly after today — today itself settles immediately."""
    return value > CalendarDay.from_date(today)
