"""DefaultFormDataDecoder — submitted values into the provider's data object."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..domain.fields import form_fields
from ..primitives.exceptions import DecodeError
from .conform import Conformer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.fields import FormFieldSpec
    from ..ports.request import IFormRequest
    from ..primitives.context import FormContext

logger = logging.getLogger(__name__)


class DefaultFormDataDecoder:
    """Decodes form values into a pydantic model or a plain mapping.

    * **Mappings** (the default ``{}`` form data) receive the first value of
      every submitted field as a string.  Decoding then encoding a mapping
      therefore reproduces only single-valued fields; declare a list field
      on a model to keep every value.
    * **Models** receive the values of their declared form fields, after
      ``conform`` normalisation; pydantic then coerces the types.  Nested
      models read dotted names, list fields read every value.  Empty values
      for non-text fields are skipped so the field keeps its default.

    Type coercion failures raise :class:`DecodeError` carrying the
    per-field pydantic messages.
    """

    def __init__(self, conformer: Conformer | None = None) -> None:
        self._conformer = conformer or Conformer()

    async def decode(
        self,
        ctx: FormContext,
        request: IFormRequest,
        values: Mapping[str, Sequence[str]],
        form_data: Any,
    ) -> Any:
        ctx.raise_if_cancelled()
        if isinstance(form_data, BaseModel):
            return self._decode_model(values, form_data)
        if isinstance(form_data, Mapping):
            return self._decode_mapping(values, form_data)
        raise DecodeError(f"Cannot decode form values into {type(form_data).__name__}")

    # ── Internals ────────────────────────────────────────────────

    @staticmethod
    def _decode_mapping(
        values: Mapping[str, Sequence[str]], form_data: Mapping[str, Any]
    ) -> dict[str, Any]:
        decoded = dict(form_data)
        for key, items in values.items():
            decoded[key] = items[0] if items else ""
        return decoded

    def _decode_model(
        self, values: Mapping[str, Sequence[str]], form_data: BaseModel
    ) -> BaseModel:
        model_cls = type(form_data)
        payload = form_data.model_dump(by_alias=True)
        _deep_update(payload, self._collect(model_cls, values, ""))
        try:
            return model_cls.model_validate(payload)
        except PydanticValidationError as exc:
            errors: dict[str, list[str]] = {}
            for error in exc.errors():
                loc = ".".join(str(p) for p in error.get("loc", ("__root__",)))
                errors.setdefault(loc, []).append(error.get("msg", "invalid value"))
            logger.warning("Decoding %s failed: %s", model_cls.__name__, errors)
            raise DecodeError(
                f"Could not decode form values into {model_cls.__name__}", errors
            ) from exc

    def _collect(
        self,
        model_cls: type[BaseModel],
        values: Mapping[str, Sequence[str]],
        prefix: str,
    ) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        for spec in form_fields(model_cls):
            key = f"{prefix}{spec.name}"
            if spec.model is not None:
                nested = self._collect(spec.model, values, f"{key}.")
                if nested:
                    updates[spec.name] = nested
                continue
            if key not in values:
                continue
            items = [self._conform(item, spec) for item in values[key]]
            if spec.is_sequence:
                updates[spec.name] = (
                    items if spec.accepts_text else [item for item in items if item]
                )
            elif items and (items[0] or spec.accepts_text):
                updates[spec.name] = items[0]
        return updates

    def _conform(self, value: str, spec: FormFieldSpec) -> str:
        if not spec.conform:
            return value
        return self._conformer.apply(value, spec.conform)


def _deep_update(target: dict[str, Any], updates: dict[str, Any]) -> None:
    for key, value in updates.items():
        current = target.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            _deep_update(current, value)
        else:
            target[key] = value
