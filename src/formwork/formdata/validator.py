"""DefaultFormDataValidator — delegates to the ValidatorProvider."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..domain.validation_info import ValidationInfo

if TYPE_CHECKING:
    from ..ports.request import IFormRequest
    from ..ports.validation import IValidatorProvider
    from ..primitives.context import FormContext


class DefaultFormDataValidator:
    """Runs the field/struct rules of typed form data.

    Plain mappings carry no rule metadata, so they validate trivially.
    """

    async def validate(
        self,
        ctx: FormContext,
        request: IFormRequest,
        validator_provider: IValidatorProvider,
        form_data: Any,
    ) -> ValidationInfo:
        if isinstance(form_data, Mapping):
            return ValidationInfo.success()
        return await validator_provider.validate(ctx, request, form_data)
