from enum import Enum


class NextDateErrorKind(str, Enum):
    EmptyRule = "empty_rule"
    InvalidDate = "invalid_date"
    InvalidFormat = "invalid_format"
    InvalidDay = "invalid_day"
    InvalidMonth = "invalid_month"
    InvalidWeekday = "invalid_weekday"
    MaxDaysExceeded = "max_days_exceeded"
    UnsupportedRule = "unsupported_rule"


class NextDateError(ValueError):
    Kind: NextDateErrorKind
    DefaultMessage = "invalid repeat rule"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.DefaultMessage)


class EmptyRuleError(NextDateError):
    Kind = NextDateErrorKind.EmptyRule
    DefaultMessage = "empty repeat rule"


class InvalidDateError(NextDateError):
    Kind = NextDateErrorKind.InvalidDate
    DefaultMessage = "invalid date"


class InvalidFormatError(NextDateError):
    Kind = NextDateErrorKind.InvalidFormat
    DefaultMessage = "invalid repeat format"


class InvalidDayError(NextDateError):
    Kind = NextDateErrorKind.InvalidDay
    DefaultMessage = "invalid day"


class InvalidMonthError(NextDateError):
    Kind = NextDateErrorKind.InvalidMonth
    DefaultMessage = "invalid month"


class InvalidWeekdayError(NextDateError):
    Kind = NextDateErrorKind.InvalidWeekday
    DefaultMessage = "invalid weekday"


class MaxDaysExceededError(NextDateError):
    Kind = NextDateErrorKind.MaxDaysExceeded
    DefaultMessage = "max days exceeded"


class UnsupportedRuleError(NextDateError):
    Kind = NextDateErrorKind.UnsupportedRule
    DefaultMessage = "unsupported repeat rule"
