from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Union

from scheduler.modules.nextdate.errors import (
    EmptyRuleError,
    InvalidDayError,
    InvalidFormatError,
    InvalidMonthError,
    InvalidWeekdayError,
    MaxDaysExceededError,
    UnsupportedRuleError,
)

MAX_INTERVAL_DAYS = 400

_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")

# Longest each month can be, leap years included.
_MONTH_MAX_DAYS = {1: 31, 2: 29, 3: 31, 4: 30, 5: 31, 6: 30, 7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31}


class DaySentinel(Enum):
    LastDay = "-1"
    PenultimateDay = "-2"


@dataclass(frozen=True)
class DailyRule:
    IntervalDays: int


@dataclass(frozen=True)
class YearlyRule:
    pass


@dataclass(frozen=True)
class WeeklyRule:
    Weekdays: frozenset[int]


@dataclass(frozen=True)
class MonthlyRule:
    Days: frozenset[int]
    Sentinels: frozenset[DaySentinel]
    Months: frozenset[int] | None = None

    def AllowsMonth(self, month: int) -> bool:
        return self.Months is None or month in self.Months


RecurrenceRule = Union[DailyRule, YearlyRule, WeeklyRule, MonthlyRule]


def _ParseInt(value: str) -> int | None:
    if not _INTEGER_PATTERN.match(value):
        return None
    return int(value)


def _ParseIntList(value: str, low: int, high: int, error: type) -> frozenset[int]:
    values = set()
    for part in value.split(","):
        number = _ParseInt(part)
        if number is None or number < low or number > high:
            raise error(f"{error.DefaultMessage}: {part!r}")
        values.add(number)
    return frozenset(values)


def _ParseDaily(tokens: list[str]) -> DailyRule:
    if len(tokens) != 2:
        raise InvalidFormatError("daily rule expects exactly one interval")
    days = _ParseInt(tokens[1])
    if days is None:
        raise InvalidFormatError(f"invalid day interval: {tokens[1]!r}")
    if days <= 0 or days > MAX_INTERVAL_DAYS:
        raise MaxDaysExceededError(f"day interval must be between 1 and {MAX_INTERVAL_DAYS}")
    return DailyRule(IntervalDays=days)


def _ParseYearly(tokens: list[str]) -> YearlyRule:
    if len(tokens) != 1:
        raise InvalidFormatError("yearly rule takes no arguments")
    return YearlyRule()


def _ParseWeekly(tokens: list[str]) -> WeeklyRule:
    if len(tokens) != 2:
        raise InvalidFormatError("weekly rule expects exactly one weekday list")
    return WeeklyRule(Weekdays=_ParseIntList(tokens[1], 1, 7, InvalidWeekdayError))


def _ParseMonthDays(value: str) -> tuple[frozenset[int], frozenset[DaySentinel]]:
    days = set()
    sentinels = set()
    for part in value.split(","):
        if part == DaySentinel.LastDay.value:
            sentinels.add(DaySentinel.LastDay)
            continue
        if part == DaySentinel.PenultimateDay.value:
            sentinels.add(DaySentinel.PenultimateDay)
            continue
        number = _ParseInt(part)
        if number is None or number < 1 or number > 31:
            raise InvalidDayError(f"invalid day: {part!r}")
        days.add(number)
    return frozenset(days), frozenset(sentinels)


def _ParseMonthly(tokens: list[str]) -> MonthlyRule:
    if len(tokens) < 2 or len(tokens) > 3:
        raise InvalidFormatError("monthly rule expects a day list and an optional month list")
    days, sentinels = _ParseMonthDays(tokens[1])
    months = None
    if len(tokens) == 3:
        months = _ParseIntList(tokens[2], 1, 12, InvalidMonthError)

    if months is not None and not sentinels:
        longest = max(_MONTH_MAX_DAYS[month] for month in months)
        if min(days) > longest:
            raise InvalidDayError("day never occurs in the selected months")

    return MonthlyRule(Days=days, Sentinels=sentinels, Months=months)


def ParseRule(rule: str) -> RecurrenceRule:
    if not rule:
        raise EmptyRuleError()

    tokens = rule.split()
    if not tokens:
        raise InvalidFormatError()

    family = tokens[0]
    if family == "d":
        return _ParseDaily(tokens)
    if family == "y":
        return _ParseYearly(tokens)
    if family == "w":
        return _ParseWeekly(tokens)
    if family == "m":
        return _ParseMonthly(tokens)
    raise UnsupportedRuleError(f"unsupported repeat rule: {family!r}")
