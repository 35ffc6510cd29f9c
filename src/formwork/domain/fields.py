"""Form field metadata declared on pydantic models.

A form model declares, per attribute, the submitted field name, a rule
expression for :class:`~formwork.validation.provider.ValidatorProvider`
and string-normalisation directives for the default decoder::

    class Contact(FormModel):
        firstname: str = form_field("", validate="required", conform="trim")
        email: str = form_field("", name="mail", validate="required,email")
        tags: list[str] = form_field(default_factory=list)
        address: Address = form_field(default_factory=Address)

Nested models are addressed with dotted names (``address.street``).
Custom decoders and validators are free to ignore this metadata.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import PydanticUndefined

#: Key under ``json_schema_extra`` holding the form metadata.
FORM_METADATA_KEY = "form"

_SEQUENCE_ORIGINS = (list, set, tuple, frozenset)


class FormModel(BaseModel):
    """Convenience base for form data models (accepts names and aliases)."""

    model_config = ConfigDict(populate_by_name=True)


def form_field(
    default: Any = PydanticUndefined,
    *,
    name: str | None = None,
    validate: str | None = None,
    conform: str | None = None,
    **kwargs: Any,
) -> Any:
    """Declare a form field, a thin wrapper around :func:`pydantic.Field`.

    Args:
        default: Field default, as for ``Field``.
        name: Submitted form field name (becomes the pydantic alias).
        validate: Comma separated rule expression, e.g. ``"required,min=3"``.
        conform: Comma separated normalisation directives, e.g. ``"trim,lower"``.
        **kwargs: Passed through to ``Field``.
    """
    metadata: dict[str, str] = {}
    if validate:
        metadata["validate"] = validate
    if conform:
        metadata["conform"] = conform
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    if metadata:
        extra[FORM_METADATA_KEY] = metadata
    return Field(default, alias=name, json_schema_extra=extra or None, **kwargs)


@dataclass(frozen=True)
class FormFieldSpec:
    """Resolved metadata for one attribute of a form model."""

    attribute: str
    name: str
    rules: str
    conform: tuple[str, ...]
    is_sequence: bool
    accepts_text: bool
    model: type[BaseModel] | None


def split_directives(expression: str | None) -> tuple[str, ...]:
    if not expression:
        return ()
    return tuple(part.strip() for part in expression.split(",") if part.strip())


@lru_cache(maxsize=None)
def form_fields(model_cls: type[BaseModel]) -> tuple[FormFieldSpec, ...]:
    """Return the form field specs of *model_cls* in declaration order."""
    specs: list[FormFieldSpec] = []
    for attribute, info in model_cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        metadata = extra.get(FORM_METADATA_KEY) or {}
        annotation = _unwrap_optional(info.annotation)

        is_sequence = get_origin(annotation) in _SEQUENCE_ORIGINS
        item = _sequence_item(annotation) if is_sequence else annotation
        nested = (
            annotation
            if isinstance(annotation, type) and issubclass(annotation, BaseModel)
            else None
        )
        specs.append(
            FormFieldSpec(
                attribute=attribute,
                name=info.alias or attribute,
                rules=str(metadata.get("validate", "")),
                conform=split_directives(metadata.get("conform")),
                is_sequence=is_sequence,
                accepts_text=_accepts_text(item),
                model=nested,
            )
        )
    return tuple(specs)


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _sequence_item(annotation: Any) -> Any:
    args = get_args(annotation)
    return args[0] if args else Any


def _accepts_text(annotation: Any) -> bool:
    if annotation is Any:
        return True
    if get_origin(annotation) is Literal:
        return any(isinstance(arg, str) for arg in get_args(annotation))
    return isinstance(annotation, type) and issubclass(annotation, str)
