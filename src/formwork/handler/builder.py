"""
Fluent builder for form handlers.

Example::

    handler = (
        FormHandlerBuilder(registry, validator_provider)
        .set_form_data_provider(ContactProvider())
        .set_named_form_data_validator("contact.validator")
        .add_named_form_extension("csrf")
        .build()
    )

Setters only record bindings; names are resolved against the
:class:`~formwork.handler.registry.ServiceRegistry` when the builder is
committed.  For every role the **last** binding wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..formdata.decoder import DefaultFormDataDecoder
from ..formdata.provider import DefaultFormDataProvider
from ..formdata.validator import DefaultFormDataValidator
from ..ports.services import implemented_roles
from ..primitives.exceptions import ConfigurationError, ServiceRoleError
from ..validation.provider import ValidatorProvider
from .handler import FormExtension, FormHandler
from .registry import PROTOCOL_ROLES, ServiceRegistry, ServiceRole, check_role

if TYPE_CHECKING:
    from ..ports.services import (
        IFormDataDecoder,
        IFormDataProvider,
        IFormDataValidator,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceBinding:
    """A role bound either to an explicit instance or to a registry name.

    ``instance=None`` without a name resets the role to its default.
    ``label`` names an explicitly added extension.
    """

    role: ServiceRole
    instance: object | None = None
    name: str | None = None
    label: str | None = None

    def describe(self) -> str:
        if self.name is not None:
            return f"{self.role.value} '{self.name}'"
        return type(self.instance).__name__


@dataclass(frozen=True)
class BuildResult:
    """Outcome of :meth:`FormHandlerBuilder.commit`: a handler or an error.

    Usage::

        result = builder.commit()
        if not result.ok:
            sys.exit(f"form handler misconfigured: {result.error}")
        handler = result.handler
    """

    handler: FormHandler | None = None
    error: ConfigurationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, handler: FormHandler) -> BuildResult:
        return cls(handler=handler)

    @classmethod
    def failure(cls, error: ConfigurationError) -> BuildResult:
        return cls(error=error)

    def unwrap(self) -> FormHandler:
        """Return the handler or raise the configuration error."""
        if self.error is not None:
            raise self.error
        if self.handler is None:
            raise ConfigurationError("Build result holds neither handler nor error")
        return self.handler


class FormHandlerBuilder:
    """Accumulates stage selections and produces an immutable FormHandler.

    Parameters
    ----------
    registry:
        Named services available to the ``set_named_*`` / ``add_named_*``
        methods.  Defaults to an empty registry.
    validator_provider:
        Validation engine handed to validators.  Defaults to a
        :class:`ValidatorProvider` with default settings.
    """

    def __init__(
        self,
        registry: ServiceRegistry | None = None,
        validator_provider: ValidatorProvider | None = None,
    ) -> None:
        self._registry = registry if registry is not None else ServiceRegistry()
        self._validator_provider = validator_provider
        self._bindings: list[ServiceBinding] = []
        self._extensions: list[ServiceBinding] = []

    # -- form service ----------------------------------------------------------

    def set_form_service(self, service: object) -> FormHandlerBuilder:
        """Bind *service* to every role it implements.

        ``None`` is ignored, leaving the current bindings untouched.
        """
        if service is None:
            return self
        return self._bind(ServiceBinding(ServiceRole.FORM_SERVICE, instance=service))

    def set_named_form_service(self, name: str) -> FormHandlerBuilder:
        return self._bind(ServiceBinding(ServiceRole.FORM_SERVICE, name=name))

    # -- single roles ----------------------------------------------------------

    def set_form_data_provider(
        self, provider: IFormDataProvider | None
    ) -> FormHandlerBuilder:
        return self._bind(ServiceBinding(ServiceRole.PROVIDER, instance=provider))

    def set_named_form_data_provider(self, name: str) -> FormHandlerBuilder:
        return self._bind(ServiceBinding(ServiceRole.PROVIDER, name=name))

    def set_form_data_decoder(
        self, decoder: IFormDataDecoder | None
    ) -> FormHandlerBuilder:
        return self._bind(ServiceBinding(ServiceRole.DECODER, instance=decoder))

    def set_named_form_data_decoder(self, name: str) -> FormHandlerBuilder:
        return self._bind(ServiceBinding(ServiceRole.DECODER, name=name))

    def set_form_data_validator(
        self, validator: IFormDataValidator | None
    ) -> FormHandlerBuilder:
        return self._bind(ServiceBinding(ServiceRole.VALIDATOR, instance=validator))

    def set_named_form_data_validator(self, name: str) -> FormHandlerBuilder:
        return self._bind(ServiceBinding(ServiceRole.VALIDATOR, name=name))

    # -- extensions ------------------------------------------------------------

    def add_form_extension(
        self, extension: object, name: str | None = None
    ) -> FormHandlerBuilder:
        """Append *extension*; its data is stored under *name* (or its class name)."""
        self._extensions.append(
            ServiceBinding(ServiceRole.EXTENSION, instance=extension, label=name)
        )
        return self

    def add_named_form_extension(self, name: str) -> FormHandlerBuilder:
        self._extensions.append(ServiceBinding(ServiceRole.EXTENSION, name=name))
        return self

    # -- build -----------------------------------------------------------------

    def commit(self) -> BuildResult:
        """Resolve all bindings and return a handler or the first config error."""
        try:
            roles = self._resolve_roles()
            extensions = self._resolve_extensions()
        except ConfigurationError as exc:
            logger.debug("Form handler configuration rejected: %s", exc)
            return BuildResult.failure(exc)

        provider = roles.get(ServiceRole.PROVIDER)
        decoder = roles.get(ServiceRole.DECODER)
        validator = roles.get(ServiceRole.VALIDATOR)
        handler = FormHandler(
            form_data_provider=(
                provider if provider is not None else DefaultFormDataProvider()
            ),
            form_data_decoder=decoder if decoder is not None else DefaultFormDataDecoder(),
            form_data_validator=(
                validator if validator is not None else DefaultFormDataValidator()
            ),
            validator_provider=(
                self._validator_provider
                if self._validator_provider is not None
                else ValidatorProvider()
            ),
            extensions=extensions,
        )
        logger.debug("Built %r", handler)
        return BuildResult.success(handler)

    def build(self) -> FormHandler:
        """Commit and return the handler.

        Raises:
            ConfigurationError: If any binding is invalid (unknown name,
                object lacking the bound role, duplicate extension name).
        """
        return self.commit().unwrap()

    # -- internals -------------------------------------------------------------

    def _bind(self, binding: ServiceBinding) -> FormHandlerBuilder:
        self._bindings.append(binding)
        return self

    def _resolve(self, binding: ServiceBinding) -> Any:
        if binding.name is not None:
            return self._registry.resolve(binding.role, binding.name)
        if binding.instance is not None:
            check_role(binding.role, binding.instance)
        return binding.instance

    def _resolve_roles(self) -> dict[ServiceRole, Any]:
        """Replay bindings in order so later ones overwrite earlier ones."""
        roles: dict[ServiceRole, Any] = {}
        for binding in self._bindings:
            service = self._resolve(binding)
            if binding.role is not ServiceRole.FORM_SERVICE:
                roles[binding.role] = service
                continue
            implemented = implemented_roles(service)
            if not implemented:
                raise ServiceRoleError(
                    ServiceRole.FORM_SERVICE.value, service, binding.describe()
                )
            for protocol in implemented:
                roles[PROTOCOL_ROLES[protocol]] = service
        return roles

    def _resolve_extensions(self) -> list[FormExtension]:
        resolved: list[FormExtension] = []
        seen: set[str] = set()
        for binding in self._extensions:
            service = self._resolve(binding)
            name = binding.name or binding.label or type(service).__name__
            if name in seen:
                raise ConfigurationError(f"Duplicate form extension name '{name}'")
            seen.add(name)
            resolved.append(FormExtension(name=name, service=service))
        return resolved
