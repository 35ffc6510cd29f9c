"""Validation protocols — rule implementations and the engine combining them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from ..domain.validation_info import ValidationInfo
    from ..primitives.context import FormContext
    from .request import IFormRequest


@runtime_checkable
class IFieldValidator(Protocol):
    """A named rule used without a parameter (``validate="myrule"``)."""

    name: str

    def validate_field(self, ctx: FormContext, value: Any) -> bool:
        """Return True when *value* satisfies the rule."""
        ...


@runtime_checkable
class IFieldValidatorWithParam(Protocol):
    """A named rule used with one parameter (``validate="myrule=42"``)."""

    name: str

    def validate_field_with_param(
        self, ctx: FormContext, value: Any, param: str
    ) -> bool:
        """Return True when *value* satisfies the rule for *param*."""
        ...


@runtime_checkable
class IStructValidator(Protocol):
    """Cross-field validation for one data type.

    Only one struct validator is active per ``struct_type``.
    ``validate_struct`` may be a plain method or a coroutine.
    """

    struct_type: type[Any]

    def validate_struct(
        self, ctx: FormContext, request: IFormRequest, data: Any
    ) -> ValidationInfo | Awaitable[ValidationInfo]:
        ...


@runtime_checkable
class IValidatorProvider(Protocol):
    """The validation engine handed to form data validators."""

    async def validate(
        self, ctx: FormContext, request: IFormRequest, data: Any
    ) -> ValidationInfo:
        """Run every applicable rule against *data* and aggregate findings."""
        ...
