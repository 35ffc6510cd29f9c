"""formwork — pluggable form handling pipeline.

Provide → decode → validate, composed from replaceable stages.
Pydantic powers typed form models; framework adapters live in
:mod:`formwork.contrib`.
"""

from __future__ import annotations

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    ErrorMessage,
    Form,
    FormFieldSpec,
    FormModel,
    FormRequest,
    ValidationInfo,
    form_field,
    form_fields,
    is_submission,
)

# ── Extensions ───────────────────────────────────────────────────
from .extensions import CsrfTokenExtension, generate_csrf_token

# ── Form data defaults ───────────────────────────────────────────
from .formdata import (
    Conformer,
    DefaultFormDataDecoder,
    DefaultFormDataEncoder,
    DefaultFormDataProvider,
    DefaultFormDataValidator,
)

# ── Handler ──────────────────────────────────────────────────────
from .handler import (
    BuildResult,
    FormDataEncoderFactory,
    FormExtension,
    FormHandler,
    FormHandlerBuilder,
    FormHandlerFactory,
    ServiceBinding,
    ServiceRegistry,
    ServiceRole,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    IFieldValidator,
    IFieldValidatorWithParam,
    IFormDataDecoder,
    IFormDataEncoder,
    IFormDataProvider,
    IFormDataValidator,
    IFormRequest,
    IStructValidator,
    IValidatorProvider,
)

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    ConfigurationError,
    ContextCancelledError,
    DecodeError,
    EncodeError,
    FormContext,
    FormProcessingError,
    FormworkError,
    ProviderError,
    ServiceRegistrationError,
    ServiceRoleError,
    UnknownServiceNameError,
    UnknownValidationRuleError,
    ValidatorError,
    get_current_form_context,
)

# ── Validation ───────────────────────────────────────────────────
from .validation import ValidatorProvider, ValidatorSettings

__all__ = [
    # Domain
    "ErrorMessage",
    "Form",
    "FormFieldSpec",
    "FormModel",
    "FormRequest",
    "ValidationInfo",
    "form_field",
    "form_fields",
    "is_submission",
    # Extensions
    "CsrfTokenExtension",
    "generate_csrf_token",
    # Form data
    "Conformer",
    "DefaultFormDataDecoder",
    "DefaultFormDataEncoder",
    "DefaultFormDataProvider",
    "DefaultFormDataValidator",
    # Handler
    "BuildResult",
    "FormDataEncoderFactory",
    "FormExtension",
    "FormHandler",
    "FormHandlerBuilder",
    "FormHandlerFactory",
    "ServiceBinding",
    "ServiceRegistry",
    "ServiceRole",
    # Ports
    "IFieldValidator",
    "IFieldValidatorWithParam",
    "IFormDataDecoder",
    "IFormDataEncoder",
    "IFormDataProvider",
    "IFormDataValidator",
    "IFormRequest",
    "IStructValidator",
    "IValidatorProvider",
    # Primitives
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
    # Validation
    "ValidatorProvider",
    "ValidatorSettings",
]

__version__ = "0.1.0"
