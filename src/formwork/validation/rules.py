"""
Built-in field rules.

Each rule is an isolated class exposing ``name`` plus ``validate_field``
(used as ``validate="rule"``) and/or ``validate_field_with_param``
(used as ``validate="rule=param"``).  Injected rules follow the same
protocols, see :mod:`formwork.ports.validation`.

Rule expressions are comma separated; a parameter follows ``=``::

    "required,email"
    "omitempty,min=3,max=20"
    "oneof=red green blue"
"""

from __future__ import annotations

import re
from collections.abc import Sized
from functools import lru_cache
from numbers import Number
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from ..primitives.exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..primitives.context import FormContext

#: Pseudo rule: stop evaluating a field's rules when its value is empty.
OMITEMPTY = "omitempty"

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
_NUMERIC_RE = re.compile(r"[-+]?\d+(\.\d+)?")
_ALPHA_RE = re.compile(r"[A-Za-z]+")
_ALPHANUM_RE = re.compile(r"[A-Za-z0-9]+")

DEFAULT_LABELS: dict[str, str] = {
    "required": "This field is required",
    "email": "Please enter a valid email address",
    "url": "Please enter a valid URL",
    "numeric": "Please enter a number",
    "alpha": "Only letters are allowed",
    "alphanum": "Only letters and digits are allowed",
    "min": "Must be at least {param}",
    "max": "Must be at most {param}",
    "len": "Must have exactly {param} characters",
    "eq": "Must be {param}",
    "ne": "Must not be {param}",
    "oneof": "Must be one of: {param}",
    "dateformat": "Please enter a valid date",
    "minimumage": "Minimum age is {param}",
    "maximumage": "Maximum age is {param}",
}


@lru_cache(maxsize=512)
def parse_rules(expression: str) -> tuple[tuple[str, str | None], ...]:
    """Split ``"required,min=3"`` into ``(("required", None), ("min", "3"))``."""
    rules: list[tuple[str, str | None]] = []
    for raw in expression.split(","):
        raw = raw.strip()
        if not raw:
            continue
        name, sep, param = raw.partition("=")
        rules.append((name.strip(), param.strip() if sep else None))
    return tuple(rules)


def default_label(rule: str, param: str | None = None) -> str:
    template = DEFAULT_LABELS.get(rule, f"Failed '{rule}' validation")
    return template.format(param=param or "")


def is_empty(value: Any) -> bool:
    """None, ``""`` and empty collections count as empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def numeric_param(rule: str, param: str) -> float:
    try:
        return float(param)
    except ValueError as exc:
        raise ConfigurationError(
            f"Rule '{rule}' expects a numeric parameter, got '{param}'"
        ) from exc


def _measure(value: Any) -> float:
    """Strings and collections measure their length, numbers themselves."""
    if isinstance(value, Number) and not isinstance(value, bool):
        return float(value)  # type: ignore[arg-type]
    if isinstance(value, Sized):
        return float(len(value))
    return float(len(as_text(value)))


# ── Presence / format ────────────────────────────────────────────────


class RequiredRule:
    name = "required"

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        return not is_empty(value)


class EmailRule:
    name = "email"

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        return bool(_EMAIL_RE.fullmatch(as_text(value)))


class UrlRule:
    name = "url"

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        parsed = urlparse(as_text(value))
        return bool(parsed.scheme and parsed.netloc)


class NumericRule:
    name = "numeric"

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        if isinstance(value, Number) and not isinstance(value, bool):
            return True
        return bool(_NUMERIC_RE.fullmatch(as_text(value)))


class AlphaRule:
    name = "alpha"

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        return bool(_ALPHA_RE.fullmatch(as_text(value)))


class AlphanumRule:
    name = "alphanum"

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        return bool(_ALPHANUM_RE.fullmatch(as_text(value)))


# ── Size / comparison ────────────────────────────────────────────────


class MinRule:
    name = "min"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        return _measure(value) >= numeric_param(self.name, param)


class MaxRule:
    name = "max"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        return _measure(value) <= numeric_param(self.name, param)


class LenRule:
    name = "len"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        return _measure(value) == numeric_param(self.name, param)


class EqRule:
    name = "eq"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        if isinstance(value, Number) and not isinstance(value, bool):
            return float(value) == numeric_param(self.name, param)  # type: ignore[arg-type]
        return as_text(value) == param


class NeRule(EqRule):
    name = "ne"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        return not super().validate_field_with_param(ctx, value, param)


class OneOfRule:
    name = "oneof"

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        return as_text(value) in param.split()


def build_default_rules() -> list[Any]:
    """Create fresh instances of all built-in rules."""
    return [
        RequiredRule(),
        EmailRule(),
        UrlRule(),
        NumericRule(),
        AlphaRule(),
        AlphanumRule(),
        MinRule(),
        MaxRule(),
        LenRule(),
        EqRule(),
        NeRule(),
        OneOfRule(),
    ]
