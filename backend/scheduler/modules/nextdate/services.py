"""Next-occurrence evaluation for repeat rules.

``NextDate`` is a pure function of its three inputs. It raises a
``NextDateError`` subclass for malformed input and never logs; callers decide
how an error reaches the user.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from scheduler.modules.nextdate.errors import EmptyRuleError, InvalidDateError
from scheduler.modules.nextdate.rules import (
    DailyRule,
    DaySentinel,
    MonthlyRule,
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
    ParseRule,
)
from scheduler.services.schedules import AddYears, IsLastDayOfMonth, IsPenultimateDayOfMonth
from scheduler.utils.dates import FormatCompactDate, ParseCompactDate, ToCalendarDate

_ONE_DAY = timedelta(days=1)


def _NextDaily(reference: date, anchor: date, rule: DailyRule) -> date:
    interval = rule.IntervalDays
    steps = max(1, (reference - anchor).days // interval + 1)
    return anchor + timedelta(days=steps * interval)


def _NextYearly(reference: date, anchor: date) -> date:
    # Each candidate is measured from the anchor so Feb 29 comes back in leap years.
    years = max(1, reference.year - anchor.year)
    candidate = AddYears(anchor, years)
    while candidate <= reference:
        years += 1
        candidate = AddYears(anchor, years)
    return candidate


def _MatchesWeekly(candidate: date, rule: WeeklyRule) -> bool:
    return candidate.isoweekday() in rule.Weekdays


def _MatchesMonthly(candidate: date, rule: MonthlyRule) -> bool:
    # The month filter also constrains "last day" and "penultimate day" matches.
    if not rule.AllowsMonth(candidate.month):
        return False
    if DaySentinel.LastDay in rule.Sentinels and IsLastDayOfMonth(candidate):
        return True
    if DaySentinel.PenultimateDay in rule.Sentinels and IsPenultimateDayOfMonth(candidate):
        return True
    return candidate.day in rule.Days


def _NextMatching(reference: date, anchor: date, matches) -> date:
    # Days on or before the reference never qualify, so stepping starts past both.
    candidate = max(anchor, reference) + _ONE_DAY
    while not matches(candidate):
        candidate += _ONE_DAY
    return candidate


def ComputeNextDate(reference: date, anchor: date, rule: RecurrenceRule) -> date:
    if isinstance(rule, DailyRule):
        return _NextDaily(reference, anchor, rule)
    if isinstance(rule, YearlyRule):
        return _NextYearly(reference, anchor)
    if isinstance(rule, WeeklyRule):
        return _NextMatching(reference, anchor, lambda candidate: _MatchesWeekly(candidate, rule))
    if isinstance(rule, MonthlyRule):
        return _NextMatching(reference, anchor, lambda candidate: _MatchesMonthly(candidate, rule))
    raise TypeError(f"unknown rule type: {type(rule).__name__}")


def NextDate(now: date | datetime, date_str: str, repeat: str) -> str:
    """Return the first date after ``now`` produced by ``repeat`` from ``date_str``.

    Args:
        now: reference instant; only its calendar date is used.
        date_str: anchor date as ``YYYYMMDD``.
        repeat: rule string (``d N``, ``y``, ``w 1,3``, ``m 1,-1 [1,6]``).

    Returns:
        The next date as ``YYYYMMDD``, strictly later than ``now``.
    """
    if not repeat:
        raise EmptyRuleError()

    try:
        anchor = ParseCompactDate(date_str)
    except ValueError as exc:
        raise InvalidDateError(f"invalid date: {date_str!r}") from exc

    rule = ParseRule(repeat)
    reference = ToCalendarDate(now)

    try:
        next_date = ComputeNextDate(reference, anchor, rule)
    except (OverflowError, ValueError) as exc:
        # Stepping past date.max raises OverflowError; relativedelta raises ValueError.
        raise InvalidDateError("next date is past the supported calendar range") from exc
    return FormatCompactDate(next_date)
