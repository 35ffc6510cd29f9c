"""Factories — canned builder configurations and encoder lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from ..formdata.encoder import DefaultFormDataEncoder
from .builder import FormHandlerBuilder
from .registry import ServiceRegistry, ServiceRole

if TYPE_CHECKING:
    from ..ports.services import (
        IFormDataDecoder,
        IFormDataEncoder,
        IFormDataProvider,
        IFormDataValidator,
    )
    from ..validation.provider import ValidatorProvider
    from .handler import FormHandler


class FormHandlerFactory:
    """Convenience entry point wrapping :class:`FormHandlerBuilder`.

    All ``create_*`` methods raise
    :class:`~formwork.primitives.exceptions.ConfigurationError` on
    invalid configuration.
    """

    def __init__(
        self,
        registry: ServiceRegistry | None = None,
        validator_provider: ValidatorProvider | None = None,
    ) -> None:
        self._registry = registry if registry is not None else ServiceRegistry()
        self._validator_provider = validator_provider

    def get_form_handler_builder(self) -> FormHandlerBuilder:
        """Return a fresh builder sharing this factory's registry."""
        return FormHandlerBuilder(self._registry, self._validator_provider)

    def create_simple_form_handler(self) -> FormHandler:
        """All roles use their defaults."""
        return self.get_form_handler_builder().build()

    def create_form_handler_with_form_service(
        self, service: object, *extension_names: str
    ) -> FormHandler:
        """Wire *service* into every role it implements, then add named extensions."""
        builder = self.get_form_handler_builder().set_form_service(service)
        for name in extension_names:
            builder.add_named_form_extension(name)
        return builder.build()

    def create_form_handler_with_form_services(
        self,
        provider: IFormDataProvider | None = None,
        decoder: IFormDataDecoder | None = None,
        validator: IFormDataValidator | None = None,
    ) -> FormHandler:
        """Explicit per-role objects; ``None`` keeps the role's default."""
        return (
            self.get_form_handler_builder()
            .set_form_data_provider(provider)
            .set_form_data_decoder(decoder)
            .set_form_data_validator(validator)
            .build()
        )


class FormDataEncoderFactory:
    """Looks up form data encoders by name."""

    def __init__(self, registry: ServiceRegistry | None = None) -> None:
        self._registry = registry if registry is not None else ServiceRegistry()

    def create_default_encoder(self) -> IFormDataEncoder:
        return DefaultFormDataEncoder()

    def create_by_named_encoder(self, name: str) -> IFormDataEncoder:
        """Raises :class:`UnknownServiceNameError` for unregistered names."""
        return cast("IFormDataEncoder", self._registry.resolve(ServiceRole.ENCODER, name))
