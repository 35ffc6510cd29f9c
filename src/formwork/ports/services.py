"""Form service roles — three independently replaceable stages plus encoding.

A single object may implement any subset of the roles.  Wiring code
probes with ``isinstance`` (the protocols are runtime checkable) instead
of relying on a shared base class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..domain.validation_info import ValidationInfo
    from ..primitives.context import FormContext
    from .request import IFormRequest
    from .validation import IValidatorProvider


@runtime_checkable
class IFormDataProvider(Protocol):
    """Supplies the initial (default) form data for a request."""

    async def get_form_data(self, ctx: FormContext, request: IFormRequest) -> Any:
        """Return the data object; ``None`` means "use the empty mapping"."""
        ...


@runtime_checkable
class IFormDataDecoder(Protocol):
    """Populates form data from submitted values."""

    async def decode(
        self,
        ctx: FormContext,
        request: IFormRequest,
        values: Mapping[str, Sequence[str]],
        form_data: Any,
    ) -> Any:
        """Return the decoded data object."""
        ...


@runtime_checkable
class IFormDataValidator(Protocol):
    """Validates decoded form data."""

    async def validate(
        self,
        ctx: FormContext,
        request: IFormRequest,
        validator_provider: IValidatorProvider,
        form_data: Any,
    ) -> ValidationInfo:
        """Return the findings; never raise for invalid data."""
        ...


@runtime_checkable
class IFormDataEncoder(Protocol):
    """Inverse of decoding: data object back to request values."""

    async def encode(self, ctx: FormContext, form_data: Any) -> dict[str, list[str]]:
        ...


#: Roles a form service or extension can implement, in pipeline order.
FORM_ROLES: tuple[type[Any], ...] = (
    IFormDataProvider,
    IFormDataDecoder,
    IFormDataValidator,
)


def implemented_roles(service: object) -> tuple[type[Any], ...]:
    """Return the form roles *service* implements (possibly none)."""
    return tuple(role for role in FORM_ROLES if isinstance(service, role))
