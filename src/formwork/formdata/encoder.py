"""DefaultFormDataEncoder — data object back into request values."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from ..domain.fields import form_fields
from ..primitives.exceptions import EncodeError

if TYPE_CHECKING:
    from ..primitives.context import FormContext

_COLLECTIONS = (list, tuple, set, frozenset)


def format_value(value: Any) -> str:
    """Render a single value the way the default decoder reads it back."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_value(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value if isinstance(value, str) else str(value)


def _format_items(value: Any) -> list[str]:
    if isinstance(value, _COLLECTIONS):
        return [format_value(item) for item in value if item is not None]
    return [format_value(value)]


class DefaultFormDataEncoder:
    """Inverse of :class:`~formwork.formdata.decoder.DefaultFormDataDecoder`.

    Uses the same field names (aliases, dotted nesting); list fields yield
    one value per item and ``None`` values are left out.
    """

    async def encode(self, ctx: FormContext, form_data: Any) -> dict[str, list[str]]:
        ctx.raise_if_cancelled()
        if isinstance(form_data, BaseModel):
            values: dict[str, list[str]] = {}
            self._encode_model(form_data, "", values)
            return values
        if isinstance(form_data, Mapping):
            return {
                str(key): _format_items(value)
                for key, value in form_data.items()
                if value is not None
            }
        raise EncodeError(f"Cannot encode {type(form_data).__name__} as form values")

    def _encode_model(
        self, model: BaseModel, prefix: str, values: dict[str, list[str]]
    ) -> None:
        for spec in form_fields(type(model)):
            value = getattr(model, spec.attribute)
            if value is None:
                continue
            key = f"{prefix}{spec.name}"
            if isinstance(value, BaseModel):
                self._encode_model(value, f"{key}.", values)
                continue
            values[key] = _format_items(value)
