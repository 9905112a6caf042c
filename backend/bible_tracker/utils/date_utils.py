import calendar
from datetime import date
from typing import Optional

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Range supported by datetime.date
MIN_YEAR = 1
MAX_YEAR = 9999


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the 1st of the month, Sunday=0 (calendar grids start on Sunday)"""
    return (date(year, month, 1).weekday() + 1) % 7


def format_date_key(value: date) -> str:
    return value.isoformat()


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move delta months forward (or back when negative)"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def is_date_future(year: int, month: int, day: int, today: Optional[date] = None) -> bool:
    return date(year, month, day) > (today or date.today())


def is_date_past(year: int, month: int, day: int, today: Optional[date] = None) -> bool:
    return date(year, month, day) < (today or date.today())


def is_date_today(year: int, month: int, day: int, today: Optional[date] = None) -> bool:
    return date(year, month, day) == (today or date.today())
