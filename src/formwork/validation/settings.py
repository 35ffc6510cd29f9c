"""ValidatorSettings — configuration consumed by the validator provider."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..primitives.exceptions import ConfigurationError

DEFAULT_DATE_FORMAT = "%Y-%m-%d"

_SECTION = "validator"


class ValidatorSettings(BaseModel):
    """Validator configuration.

    Attributes:
        date_format: ``strptime`` format used by ``dateformat``,
            ``minimumage`` and ``maximumage`` (config key ``dateFormat``).
        custom_regex: rule name -> pattern; each entry becomes a rule
            matching the whole field value (config key ``customRegex``).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date_format: str = Field(DEFAULT_DATE_FORMAT, alias="dateFormat")
    custom_regex: dict[str, str] = Field(default_factory=dict, alias="customRegex")

    @field_validator("custom_regex")
    @classmethod
    def _patterns_compile(cls, value: dict[str, str]) -> dict[str, str]:
        for name, pattern in value.items():
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid pattern for rule '{name}': {exc}") from exc
        return value

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> ValidatorSettings:
        """Build settings from an application config mapping.

        Accepts either a nested section::

            {"validator": {"dateFormat": "%d.%m.%Y", "customRegex": {...}}}

        or flat dotted keys (``"validator.dateFormat"``).  Unknown keys
        are ignored.

        Raises:
            ConfigurationError: If a value has the wrong type or a
                regex pattern does not compile.
        """
        config = config or {}
        section = dict(config.get(_SECTION) or {})
        prefix = f"{_SECTION}."
        for key, value in config.items():
            if key.startswith(prefix):
                section[key[len(prefix) :]] = value
        try:
            return cls.model_validate(section)
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Invalid validator configuration: {exc}") from exc
