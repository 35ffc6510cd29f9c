"""FormHandler — runs provide → decode → validate for one request."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..domain.form import Form
from ..domain.request import is_submission
from ..domain.validation_info import ValidationInfo
from ..formdata.decoder import DefaultFormDataDecoder
from ..ports.services import IFormDataDecoder, IFormDataProvider, IFormDataValidator
from ..primitives.context import (
    reset_current_form_context,
    set_current_form_context,
)
from ..primitives.exceptions import (
    DecodeError,
    FormworkError,
    ProviderError,
    ValidatorError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..ports.request import IFormRequest
    from ..primitives.context import FormContext
    from ..validation.provider import ValidatorProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormExtension:
    """An auxiliary stage attached to a handler under *name*.

    The wrapped service may implement any subset of the three roles; its
    data is kept under ``Form.extension_data[name]``.
    """

    name: str
    service: object

    @property
    def provider(self) -> IFormDataProvider | None:
        return self.service if isinstance(self.service, IFormDataProvider) else None

    @property
    def decoder(self) -> IFormDataDecoder | None:
        return self.service if isinstance(self.service, IFormDataDecoder) else None

    @property
    def validator(self) -> IFormDataValidator | None:
        return self.service if isinstance(self.service, IFormDataValidator) else None


class FormHandler:
    """Immutable pipeline executor built by
    :class:`~formwork.handler.builder.FormHandlerBuilder`.

    One instance serves any number of concurrent requests; no request
    state is stored on the handler.

    Phases:

    1. **Provide**: the provider returns the initial data object
       (``None`` becomes ``{}``).
    2. **Decode**: submitted values are decoded into that object.
    3. **Validate**: the main validator and every extension validator
       run; their findings are merged, never short-circuited.

    Infrastructure failures raise (:class:`ProviderError`,
    :class:`DecodeError`, :class:`ValidatorError`,
    :class:`ContextCancelledError`); invalid data is reported in the
    returned form's ``validation_info``.
    """

    __slots__ = (
        "_decoder",
        "_extension_decoder",
        "_extensions",
        "_provider",
        "_validator",
        "_validator_provider",
    )

    def __init__(
        self,
        *,
        form_data_provider: IFormDataProvider,
        form_data_decoder: IFormDataDecoder,
        form_data_validator: IFormDataValidator,
        validator_provider: ValidatorProvider,
        extensions: Sequence[FormExtension] = (),
    ) -> None:
        self._provider = form_data_provider
        self._decoder = form_data_decoder
        self._validator = form_data_validator
        self._validator_provider = validator_provider
        self._extensions: tuple[FormExtension, ...] = tuple(extensions)
        self._extension_decoder = DefaultFormDataDecoder()

    # ── Introspection ────────────────────────────────────────────

    @property
    def form_data_provider(self) -> IFormDataProvider:
        return self._provider

    @property
    def form_data_decoder(self) -> IFormDataDecoder:
        return self._decoder

    @property
    def form_data_validator(self) -> IFormDataValidator:
        return self._validator

    @property
    def validator_provider(self) -> ValidatorProvider:
        return self._validator_provider

    @property
    def extensions(self) -> tuple[FormExtension, ...]:
        return self._extensions

    def __repr__(self) -> str:
        return (
            f"FormHandler(provider={type(self._provider).__name__}, "
            f"decoder={type(self._decoder).__name__}, "
            f"validator={type(self._validator).__name__}, "
            f"extensions={[ext.name for ext in self._extensions]})"
        )

    # ── Public API ───────────────────────────────────────────────

    async def handle_form(self, ctx: FormContext, request: IFormRequest) -> Form[Any]:
        """Dispatch on the request method: POST-like submits, others provide."""
        if is_submission(request.method):
            return await self.handle_submitted_form(ctx, request)
        return await self.handle_unsubmitted_form(ctx, request)

    async def handle_unsubmitted_form(
        self, ctx: FormContext, request: IFormRequest
    ) -> Form[Any]:
        """Provide default data only; nothing is decoded or validated."""
        token = set_current_form_context(ctx)
        try:
            ctx.raise_if_cancelled()
            data = await self._provide(ctx, request, self._provider)
            extension_data: dict[str, Any] = {}
            for extension in self._extensions:
                extension_data[extension.name] = await self._provide_extension(
                    ctx, request, extension
                )
        finally:
            reset_current_form_context(token)

        logger.debug("Provided unsubmitted form data %s", type(data).__name__)
        return Form(data=data, is_submitted=False, extension_data=extension_data)

    async def handle_submitted_form(
        self, ctx: FormContext, request: IFormRequest
    ) -> Form[Any]:
        """Decode and validate the submitted values."""
        token = set_current_form_context(ctx)
        try:
            ctx.raise_if_cancelled()
            values = await self._read_values(request)

            data = await self._provide(ctx, request, self._provider)
            ctx.raise_if_cancelled()
            data = await self._decode(ctx, request, self._decoder, values, data)

            extension_data: dict[str, Any] = {}
            for extension in self._extensions:
                provided = await self._provide_extension(ctx, request, extension)
                decoder = extension.decoder
                extension_data[extension.name] = await self._decode(
                    ctx,
                    request,
                    decoder if decoder is not None else self._extension_decoder,
                    values,
                    provided,
                )

            ctx.raise_if_cancelled()
            validation_info = await self._validate(ctx, request, self._validator, data)
            for extension in self._extensions:
                if extension.validator is None:
                    continue
                validation_info = validation_info.merge(
                    await self._validate(
                        ctx, request, extension.validator, extension_data[extension.name]
                    )
                )
        finally:
            reset_current_form_context(token)

        logger.debug(
            "Handled submitted form %s (%d finding(s))",
            type(data).__name__,
            validation_info.error_count,
        )
        return Form(
            data=data,
            is_submitted=True,
            validation_info=validation_info,
            extension_data=extension_data,
        )

    # ── Internals ────────────────────────────────────────────────

    @staticmethod
    async def _read_values(request: IFormRequest) -> Mapping[str, Sequence[str]]:
        try:
            return await request.form_values()
        except FormworkError:
            raise
        except Exception as exc:
            logger.warning("Reading form values failed: %s", exc)
            raise DecodeError(f"Could not read submitted form values: {exc}") from exc

    @staticmethod
    async def _provide(
        ctx: FormContext, request: IFormRequest, provider: IFormDataProvider
    ) -> Any:
        try:
            data = await provider.get_form_data(ctx, request)
        except FormworkError:
            raise
        except Exception as exc:
            logger.warning(
                "Form data provider %s failed: %s", type(provider).__name__, exc
            )
            raise ProviderError(
                f"{type(provider).__name__} could not provide form data: {exc}"
            ) from exc
        return {} if data is None else data

    async def _provide_extension(
        self, ctx: FormContext, request: IFormRequest, extension: FormExtension
    ) -> Any:
        if extension.provider is None:
            return {}
        return await self._provide(ctx, request, extension.provider)

    @staticmethod
    async def _decode(
        ctx: FormContext,
        request: IFormRequest,
        decoder: IFormDataDecoder,
        values: Mapping[str, Sequence[str]],
        form_data: Any,
    ) -> Any:
        try:
            return await decoder.decode(ctx, request, values, form_data)
        except FormworkError:
            raise
        except Exception as exc:
            logger.warning("Form data decoder %s failed: %s", type(decoder).__name__, exc)
            raise DecodeError(
                f"{type(decoder).__name__} could not decode form values: {exc}"
            ) from exc

    async def _validate(
        self,
        ctx: FormContext,
        request: IFormRequest,
        validator: IFormDataValidator,
        form_data: Any,
    ) -> ValidationInfo:
        try:
            result = await validator.validate(
                ctx, request, self._validator_provider, form_data
            )
        except FormworkError:
            raise
        except Exception as exc:
            logger.warning(
                "Form data validator %s failed: %s", type(validator).__name__, exc
            )
            raise ValidatorError(
                f"{type(validator).__name__} could not validate form data: {exc}"
            ) from exc
        return result if result is not None else ValidationInfo.success()
