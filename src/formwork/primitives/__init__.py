from .context import FormContext, get_current_form_context
from .exceptions import (
    ConfigurationError,
    ContextCancelledError,
    DecodeError,
    EncodeError,
    FormProcessingError,
    FormworkError,
    ProviderError,
    ServiceRegistrationError,
    ServiceRoleError,
    UnknownServiceNameError,
    UnknownValidationRuleError,
    ValidatorError,
)

__all__ = [
    "ConfigurationError",
    "ContextCancelledError",
    "DecodeError",
    "EncodeError",
    "FormContext",
    "FormProcessingError",
    "FormworkError",
    "ProviderError",
    "ServiceRegistrationError",
    "ServiceRoleError",
    "UnknownServiceNameError",
    "UnknownValidationRuleError",
    "ValidatorError",
    "get_current_form_context",
]
