"""DefaultFormDataProvider — the empty string-keyed mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..ports.request import IFormRequest
    from ..primitives.context import FormContext


class DefaultFormDataProvider:
    """Provides a fresh ``{}`` for every request."""

    async def get_form_data(
        self, ctx: FormContext, request: IFormRequest
    ) -> dict[str, str]:
        return {}
