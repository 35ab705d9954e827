from __future__ import annotations

from datetime import date
import calendar

from dateutil.relativedelta import relativedelta


def DaysInMonth(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def AddYears(start_date: date, years: int) -> date:
    # relativedelta clamps Feb 29 to Feb 28 in non-leap years.
    return start_date + relativedelta(years=years)


def IsLastDayOfMonth(value: date) -> bool:
    return value.day == DaysInMonth(value.year, value.month)


def IsPenultimateDayOfMonth(value: date) -> bool:
    return value.day == DaysInMonth(value.year, value.month) - 1
