from .request import IFormRequest
from .services import (
    FORM_ROLES,
    IFormDataDecoder,
    IFormDataEncoder,
    IFormDataProvider,
    IFormDataValidator,
    implemented_roles,
)
from formwork.ports.validation import (
    IFieldValidator,
    IFieldValidatorWithParam,
    IStructValidator,
    IValidatorProvider,
)

__all__ = [
    "FORM_ROLES",
    "IFieldValidator",
    "IFieldValidatorWithParam",
    "IFormDataDecoder",
    "IFormDataEncoder",
    "IFormDataProvider",
    "IFormDataValidator",
    "IFormRequest",
    "IStructValidator",
    "IValidatorProvider",
    "implemented_roles",
]
