"""Handler composition: registry, builder, handler and factories."""

from .builder import BuildResult, FormHandlerBuilder, ServiceBinding
from .factory import FormDataEncoderFactory, FormHandlerFactory
from .handler import FormExtension, FormHandler
from .registry import ServiceDefinition, ServiceRegistry, ServiceRole

__all__ = [
    "BuildResult",
    "FormDataEncoderFactory",
    "FormExtension",
    "FormHandler",
    "FormHandlerBuilder",
    "FormHandlerFactory",
    "ServiceBinding",
    "ServiceDefinition",
    "ServiceRegistry",
    "ServiceRole",
]
