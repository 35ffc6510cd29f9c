"""ValidatorProvider — single validation engine behind the default validator."""

from __future__ import annotations

import logging
from datetime import date
from inspect import isawaitable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from ..domain.fields import form_fields
from ..domain.validation_info import ValidationInfo
from ..ports.validation import (
    IFieldValidator,
    IFieldValidatorWithParam,
    IStructValidator,
)
from ..primitives.exceptions import ConfigurationError, UnknownValidationRuleError
from .date import build_date_rules
from .regex import build_regex_rules
from .rules import OMITEMPTY, build_default_rules, default_label, is_empty, parse_rules
from .settings import ValidatorSettings

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ..domain.fields import FormFieldSpec
    from ..ports.request import IFormRequest
    from ..primitives.context import FormContext

logger = logging.getLogger(__name__)


class ValidatorProvider:
    """Combines built-in rules, configured rules and injected validators.

    Field rules are looked up by name from the ``validate`` expression of
    each :func:`~formwork.domain.fields.form_field`; struct validators are
    looked up by the type of the validated object (or a base class).

    **Sharp edge:** only one struct validator is kept per type; a later
    registration silently replaces the earlier one (a warning is logged).

    Parameters
    ----------
    field_validators:
        Objects implementing ``IFieldValidator`` and/or
        ``IFieldValidatorWithParam``.  Names must be unique, including
        against the built-in rules.
    struct_validators:
        Objects implementing ``IStructValidator``.
    settings:
        Date format and custom regex rules.
    today:
        Clock used by the age rules.  Defaults to :meth:`date.today`.
    """

    def __init__(
        self,
        field_validators: Iterable[object] = (),
        struct_validators: Iterable[IStructValidator] = (),
        *,
        settings: ValidatorSettings | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._settings = settings or ValidatorSettings()
        self._today: Callable[[], date] = today or date.today
        self._field_validators: dict[str, object] = {}
        self._struct_validators: dict[type[Any], IStructValidator] = {}

        for rule in (
            *build_default_rules(),
            *build_date_rules(self._settings.date_format, self._today),
            *build_regex_rules(self._settings.custom_regex),
        ):
            self.register_field_validator(rule)
        for field_validator in field_validators:
            self.register_field_validator(field_validator)
        for struct_validator in struct_validators:
            self.register_struct_validator(struct_validator)

    @property
    def settings(self) -> ValidatorSettings:
        return self._settings

    # ── Registration ─────────────────────────────────────────────

    def register_field_validator(self, validator: object) -> None:
        """Register a named field rule.

        Raises:
            ConfigurationError: If *validator* implements neither field
                protocol or its name is already taken.
        """
        if not isinstance(validator, (IFieldValidator, IFieldValidatorWithParam)):
            raise ConfigurationError(
                f"{type(validator).__name__} is not a field validator"
            )
        name = validator.name
        if name == OMITEMPTY or name in self._field_validators:
            raise ConfigurationError(f"Field validator '{name}' is already registered")
        self._field_validators[name] = validator
        logger.debug(
            "Registered field validator %s (%s)", name, type(validator).__name__
        )

    def register_struct_validator(self, validator: IStructValidator) -> None:
        """Register a struct validator; replaces any earlier one for the type."""
        struct_type = validator.struct_type
        existing = self._struct_validators.get(struct_type)
        if existing is not None and existing is not validator:
            logger.warning(
                "Struct validator %s for %s replaced by %s",
                type(existing).__name__,
                struct_type.__name__,
                type(validator).__name__,
            )
        self._struct_validators[struct_type] = validator

    # ── Lookup ───────────────────────────────────────────────────

    def get_field_validator(self, name: str) -> object | None:
        return self._field_validators.get(name)

    def get_struct_validator(self, data_type: type[Any]) -> IStructValidator | None:
        """Return the struct validator for *data_type* or its nearest base."""
        for klass in data_type.__mro__:
            validator = self._struct_validators.get(klass)
            if validator is not None:
                return validator
        return None

    @property
    def rule_names(self) -> list[str]:
        return sorted(self._field_validators)

    # ── Validation ───────────────────────────────────────────────

    async def validate(
        self, ctx: FormContext, request: IFormRequest, data: Any
    ) -> ValidationInfo:
        """Run all applicable rules against *data* and aggregate findings.

        Every field with a failing rule contributes one finding (its first
        failing rule); struct validator findings are appended as reported.
        """
        ctx.raise_if_cancelled()
        return await self._validate_object(ctx, request, data, "")

    async def _validate_object(
        self, ctx: FormContext, request: IFormRequest, data: Any, prefix: str
    ) -> ValidationInfo:
        info = ValidationInfo()
        if isinstance(data, BaseModel):
            for spec in form_fields(type(data)):
                value = getattr(data, spec.attribute)
                path = f"{prefix}{spec.name}"
                if spec.rules:
                    self._check_field(ctx, path, spec, value, info)
                if spec.model is not None and isinstance(value, BaseModel):
                    nested = await self._validate_object(
                        ctx, request, value, f"{path}."
                    )
                    info = info.merge(nested)

        struct_validator = self.get_struct_validator(type(data))
        if struct_validator is not None:
            result = struct_validator.validate_struct(ctx, request, data)
            if isawaitable(result):
                result = await result
            info = info.merge(_prefixed(result, prefix))
        return info

    def _check_field(
        self,
        ctx: FormContext,
        path: str,
        spec: FormFieldSpec,
        value: Any,
        info: ValidationInfo,
    ) -> None:
        chain = self._resolve_chain(path, spec)
        for rule_name, param, validator in chain:
            if validator is None:
                if is_empty(value):
                    return
                continue
            if not self._dispatch(ctx, validator, rule_name, path, value, param):
                info.add_field_error(
                    path,
                    f"formError.{path}.{rule_name}",
                    default_label(rule_name, param),
                )
                return

    def _resolve_chain(
        self, path: str, spec: FormFieldSpec
    ) -> list[tuple[str, str | None, object | None]]:
        """Look up every rule of the field; ``omitempty`` maps to ``None``."""
        chain: list[tuple[str, str | None, object | None]] = []
        for rule_name, param in parse_rules(spec.rules):
            if rule_name == OMITEMPTY:
                chain.append((rule_name, param, None))
                continue
            validator = self._field_validators.get(rule_name)
            if validator is None:
                raise UnknownValidationRuleError(rule_name, path, self.rule_names)
            if getattr(validator, "text_only", False) and not spec.accepts_text:
                raise ConfigurationError(
                    f"Rule '{rule_name}' on field '{path}' requires a text field"
                )
            chain.append((rule_name, param, validator))
        return chain

    @staticmethod
    def _dispatch(
        ctx: FormContext,
        validator: object,
        rule_name: str,
        path: str,
        value: Any,
        param: str | None,
    ) -> bool:
        if param is None:
            if not isinstance(validator, IFieldValidator):
                raise ConfigurationError(
                    f"Rule '{rule_name}' on field '{path}' requires a parameter"
                )
            return bool(validator.validate_field(ctx, value))
        if not isinstance(validator, IFieldValidatorWithParam):
            raise ConfigurationError(
                f"Rule '{rule_name}' on field '{path}' does not accept a parameter"
            )
        return bool(validator.validate_field_with_param(ctx, value, param))


def _prefixed(info: ValidationInfo, prefix: str) -> ValidationInfo:
    if not prefix:
        return info
    return ValidationInfo(
        field_errors={f"{prefix}{k}": list(v) for k, v in info.field_errors.items()},
        struct_errors=list(info.struct_errors),
    )
