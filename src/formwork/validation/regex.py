"""Rules derived from ``validator.customRegex`` configuration entries."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import ConfigurationError
from .rules import as_text

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..primitives.context import FormContext


class RegexRule:
    """Matches the *whole* field value against a compiled pattern."""

    def __init__(self, name: str, pattern: str | re.Pattern[str]) -> None:
        self.name = name
        try:
            self._pattern = re.compile(pattern)
        except re.error as exc:
            raise ConfigurationError(
                f"Invalid pattern for regex rule '{name}': {exc}"
            ) from exc

    @property
    def pattern(self) -> str:
        return self._pattern.pattern

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        return self._pattern.fullmatch(as_text(value)) is not None


def build_regex_rules(custom_regex: Mapping[str, str]) -> list[RegexRule]:
    return [RegexRule(name, pattern) for name, pattern in custom_regex.items()]
