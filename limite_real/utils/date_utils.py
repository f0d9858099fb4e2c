"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import Tuple


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the given month"""
    return calendar.monthrange(year, month)[1]


def add_months(year: int, month: int, months: int) -> Tuple[int, int]:
    """Shift a (year, month) pair by a number of months"""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def closing_date_for(year: int, month: int, closing_day: int) -> date:
    """Closing date within a month, clamped to the month's last day (31 -> Feb 28)"""
    return date(year, month, min(closing_day, last_day_of_month(year, month)))
