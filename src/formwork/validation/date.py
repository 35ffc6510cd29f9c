"""Date rules: ``dateformat``, ``minimumage=N`` and ``maximumage=N``.

All three parse the field value with the configured ``strptime`` format.
Values that do not parse fail every date rule.  The rules only apply to
text fields: a field typed as ``date`` is already parsed by the decoder,
so attaching a date rule to it is a configuration error.  Ages are whole years
between the parsed date and *today*; both bounds are inclusive.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from .rules import numeric_param

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..primitives.context import FormContext


def parse_date(value: Any, date_format: str) -> date | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, date_format).date()
    except ValueError:
        return None


def age_in_years(born: date, today: date) -> int:
    """Completed years between *born* and *today*."""
    had_birthday = (today.month, today.day) >= (born.month, born.day)
    return today.year - born.year - (0 if had_birthday else 1)


class DateFormatRule:
    name = "dateformat"
    text_only = True

    def __init__(self, date_format: str) -> None:
        self._date_format = date_format

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        return parse_date(value, self._date_format) is not None


class _AgeRule:
    name = ""
    text_only = True

    def __init__(self, date_format: str, today: Callable[[], date]) -> None:
        self._date_format = date_format
        self._today = today

    def _age(self, value: Any) -> int | None:
        born = parse_date(value, self._date_format)
        if born is None:
            return None
        return age_in_years(born, self._today())


class MinimumAgeRule(_AgeRule):
    name = "minimumage"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        age = self._age(value)
        return age is not None and age >= numeric_param(self.name, param)


class MaximumAgeRule(_AgeRule):
    name = "maximumage"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        age = self._age(value)
        return age is not None and age <= numeric_param(self.name, param)


def build_date_rules(date_format: str, today: Callable[[], date]) -> list[Any]:
    return [
        DateFormatRule(date_format),
        MinimumAgeRule(date_format, today),
        MaximumAgeRule(date_format, today),
    ]
