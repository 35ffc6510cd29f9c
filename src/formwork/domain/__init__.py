from .fields import FormFieldSpec, FormModel, form_field, form_fields
from .form import Form
from .request import SUBMISSION_METHODS, FormRequest, is_submission, normalize_values
from formwork.domain.validation_info import ErrorMessage, ValidationInfo

__all__ = [
    "ErrorMessage",
    "Form",
    "FormFieldSpec",
    "FormModel",
    "FormRequest",
    "SUBMISSION_METHODS",
    "ValidationInfo",
    "form_field",
    "form_fields",
    "is_submission",
    "normalize_values",
]
