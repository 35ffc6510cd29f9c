"""ServiceRegistry — named form services, populated at process start."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..ports.services import (
    IFormDataDecoder,
    IFormDataEncoder,
    IFormDataProvider,
    IFormDataValidator,
    implemented_roles,
)
from ..primitives.exceptions import (
    ConfigurationError,
    FormworkError,
    ServiceRegistrationError,
    ServiceRoleError,
    UnknownServiceNameError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class ServiceRole(str, Enum):
    """Roles a named service can be registered and resolved for."""

    FORM_SERVICE = "form service"
    PROVIDER = "form data provider"
    DECODER = "form data decoder"
    VALIDATOR = "form data validator"
    EXTENSION = "form extension"
    ENCODER = "form data encoder"


_ROLE_PROTOCOLS: dict[ServiceRole, type[Any]] = {
    ServiceRole.PROVIDER: IFormDataProvider,
    ServiceRole.DECODER: IFormDataDecoder,
    ServiceRole.VALIDATOR: IFormDataValidator,
    ServiceRole.ENCODER: IFormDataEncoder,
}

#: Pipeline role of each form protocol, used when probing form services.
PROTOCOL_ROLES: dict[type[Any], ServiceRole] = {
    IFormDataProvider: ServiceRole.PROVIDER,
    IFormDataDecoder: ServiceRole.DECODER,
    IFormDataValidator: ServiceRole.VALIDATOR,
}


def check_role(role: ServiceRole, service: object, source: str | None = None) -> None:
    """Raise :class:`ServiceRoleError` unless *service* can play *role*.

    Form services must implement at least one pipeline role; extensions
    may implement any subset, including none.
    """
    if role is ServiceRole.EXTENSION:
        return
    if role is ServiceRole.FORM_SERVICE:
        if not implemented_roles(service):
            raise ServiceRoleError(role.value, service, source)
        return
    if not isinstance(service, _ROLE_PROTOCOLS[role]):
        raise ServiceRoleError(role.value, service, source)


@dataclass
class ServiceDefinition:
    """Descriptor for a named service.

    Supports **deferred instantiation**: supply a *factory* and the
    instance is created on first resolution, then reused.
    """

    role: ServiceRole
    name: str
    instance: object | None = None
    factory: Callable[[], object] | None = None

    def build(self) -> object:
        """Return the instance, creating it with the factory on first use.

        Raises:
            ConfigurationError: If the factory fails or returns ``None``.
        """
        if self.instance is None and self.factory is not None:
            try:
                instance = self.factory()
            except FormworkError:
                raise
            except Exception as exc:
                raise ConfigurationError(
                    f"Factory for {self.role.value} '{self.name}' failed: {exc}"
                ) from exc
            if instance is None:
                raise ConfigurationError(
                    f"Factory for {self.role.value} '{self.name}' returned None"
                )
            self.instance = instance
        return self.instance


class ServiceRegistry:
    """Maps ``(role, name)`` to a service instance or factory.

    Populate it during bootstrapping, then hand it to builders and
    factories; it is treated as read-only while requests are served.

    **Conflict detection:** registering a second service under a taken
    name for the same role raises :class:`ServiceRegistrationError`.
    """

    def __init__(self) -> None:
        self._definitions: dict[ServiceRole, dict[str, ServiceDefinition]] = {
            role: {} for role in ServiceRole
        }

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        role: ServiceRole,
        name: str,
        instance: object | None = None,
        *,
        factory: Callable[[], object] | None = None,
    ) -> None:
        """Register *instance* (or a lazy *factory*) under *name*.

        Raises:
            ConfigurationError: If not exactly one of instance/factory is given.
            ServiceRegistrationError: If *name* is already taken for *role*.
            ServiceRoleError: If *instance* does not implement *role*.
        """
        if (instance is None) == (factory is None):
            raise ConfigurationError(
                f"Register {role.value} '{name}' with either an instance or a factory"
            )
        existing = self._definitions[role].get(name)
        if existing is not None:
            if instance is not None and existing.instance is instance:
                return
            raise ServiceRegistrationError(
                f"Duplicate {role.value} name '{name}': already registered"
            )
        if instance is not None:
            check_role(role, instance, f"{role.value} '{name}'")
        self._definitions[role][name] = ServiceDefinition(
            role=role, name=name, instance=instance, factory=factory
        )
        logger.debug("Registered %s '%s'", role.value, name)

    def add(self, role: ServiceRole, name: str) -> Callable[[type[Any]], type[Any]]:
        """Decorator-style registration of a service class (built lazily).

        Usage::

            @registry.add(ServiceRole.EXTENSION, "csrf")
            class CsrfExtension: ...
        """

        def wrapper(cls: type[Any]) -> type[Any]:
            self.register(role, name, factory=cls)
            return cls

        return wrapper

    def register_form_service(
        self,
        name: str,
        service: object | None = None,
        *,
        factory: Callable[[], object] | None = None,
    ) -> None:
        self.register(ServiceRole.FORM_SERVICE, name, service, factory=factory)

    def register_form_data_provider(
        self,
        name: str,
        provider: object | None = None,
        *,
        factory: Callable[[], object] | None = None,
    ) -> None:
        self.register(ServiceRole.PROVIDER, name, provider, factory=factory)

    def register_form_data_decoder(
        self,
        name: str,
        decoder: object | None = None,
        *,
        factory: Callable[[], object] | None = None,
    ) -> None:
        self.register(ServiceRole.DECODER, name, decoder, factory=factory)

    def register_form_data_validator(
        self,
        name: str,
        validator: object | None = None,
        *,
        factory: Callable[[], object] | None = None,
    ) -> None:
        self.register(ServiceRole.VALIDATOR, name, validator, factory=factory)

    def register_form_extension(
        self,
        name: str,
        extension: object | None = None,
        *,
        factory: Callable[[], object] | None = None,
    ) -> None:
        self.register(ServiceRole.EXTENSION, name, extension, factory=factory)

    def register_form_data_encoder(
        self,
        name: str,
        encoder: object | None = None,
        *,
        factory: Callable[[], object] | None = None,
    ) -> None:
        self.register(ServiceRole.ENCODER, name, encoder, factory=factory)

    # ── Lookup ───────────────────────────────────────────────────

    def resolve(self, role: ServiceRole, name: str) -> object:
        """Return the service registered under *name* for *role*.

        Raises:
            UnknownServiceNameError: If nothing is registered under *name*.
            ServiceRoleError: If a factory-built service lacks the role.
        """
        definition = self._definitions[role].get(name)
        if definition is None:
            raise UnknownServiceNameError(role.value, name, self.names(role))
        service = definition.build()
        check_role(role, service, f"{role.value} '{name}'")
        return service

    def has(self, role: ServiceRole, name: str) -> bool:
        return name in self._definitions[role]

    def names(self, role: ServiceRole) -> list[str]:
        return sorted(self._definitions[role])

    # ── Cleanup ──────────────────────────────────────────────────

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        for definitions in self._definitions.values():
            definitions.clear()


__all__ = [
    "PROTOCOL_ROLES",
    "ServiceDefinition",
    "ServiceRegistry",
    "ServiceRole",
    "check_role",
]
