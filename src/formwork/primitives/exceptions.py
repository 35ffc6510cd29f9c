"""Exception hierarchy for formwork.

Two families:

* :class:`ConfigurationError`: programmer errors detected while wiring a
  handler (unknown service names, objects bound to roles they do not
  implement, unknown validation rules).  Surface at startup.
* :class:`FormProcessingError`: infrastructure failures while handling a
  request (undecodable values, failing providers, cancelled contexts).

Validation failures are **not** exceptions; they are reported inside
:class:`~formwork.domain.validation_info.ValidationInfo`.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class FormworkError(Exception):
    """Root exception for the entire formwork package."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


# ── Configuration ────────────────────────────────────────────────────


class ConfigurationError(FormworkError):
    """Raised when a form handler or validator is wired incorrectly."""


class UnknownServiceNameError(ConfigurationError):
    """A named service was requested but never registered.

    Provides fuzzy-matched suggestions for likely intended names.
    """

    def __init__(self, role: str, name: str, known_names: list[str]) -> None:
        self.role = role
        self.name = name
        self.known_names = known_names
        self.suggestions = get_close_matches(name, known_names, n=3, cutoff=0.6)

        message = f"No {role} registered under name '{name}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_SERVICE_NAME",
            "role": self.role,
            "name": self.name,
            "suggestions": self.suggestions,
        }


class ServiceRoleError(ConfigurationError):
    """An object was bound to a role it does not implement."""

    def __init__(self, role: str, service: object, source: str | None = None) -> None:
        self.role = role
        self.service = service
        self.source = source
        described = source or type(service).__name__
        super().__init__(f"{described} does not implement the {role} role")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "SERVICE_ROLE_MISMATCH",
            "role": self.role,
            "service": self.source or type(self.service).__name__,
        }


class ServiceRegistrationError(ConfigurationError):
    """Raised when a registry name is registered twice for the same role."""


class UnknownValidationRuleError(ConfigurationError):
    """A field declares a validation rule nobody registered."""

    def __init__(self, rule: str, field: str, known_rules: list[str]) -> None:
        self.rule = rule
        self.field = field
        self.suggestions = get_close_matches(rule, known_rules, n=3, cutoff=0.6)

        message = f"Unknown validation rule '{rule}' on field '{field}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_VALIDATION_RULE",
            "rule": self.rule,
            "field": self.field,
            "suggestions": self.suggestions,
        }


# ── Request processing ───────────────────────────────────────────────


class FormProcessingError(FormworkError):
    """Base class for infrastructure failures while handling a request."""


class DecodeError(FormProcessingError):
    """Submitted values could not be read or decoded into form data.

    Carries structured details (``{field: [messages]}``) when available.
    """

    def __init__(
        self, message: str, errors: dict[str, list[str]] | None = None
    ) -> None:
        self.errors: dict[str, list[str]] = errors or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "DECODE_ERROR",
            "message": str(self),
            "errors": self.errors,
        }


class ProviderError(FormProcessingError):
    """A form data provider failed to produce default data."""


class ValidatorError(FormProcessingError):
    """A form data validator failed to run (not: the data is invalid)."""


class EncodeError(FormProcessingError):
    """Form data could not be encoded back to request values."""


class ContextCancelledError(FormProcessingError):
    """The request context was cancelled or its deadline passed."""
