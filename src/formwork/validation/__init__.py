"""Validation engine: ValidatorProvider, built-in, date and regex rules."""

from __future__ import annotations

from .date import DateFormatRule, MaximumAgeRule, MinimumAgeRule, age_in_years, parse_date
from .provider import ValidatorProvider
from .regex import RegexRule
from .rules import OMITEMPTY, build_default_rules, parse_rules
from .settings import DEFAULT_DATE_FORMAT, ValidatorSettings

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "DateFormatRule",
    "MaximumAgeRule",
    "MinimumAgeRule",
    "OMITEMPTY",
    "RegexRule",
    "ValidatorProvider",
    "ValidatorSettings",
    "age_in_years",
    "build_default_rules",
    "parse_date",
    "parse_rules",
]
