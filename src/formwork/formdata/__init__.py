"""Default implementations of the form data roles."""

from __future__ import annotations

from .conform import Conformer
from .decoder import DefaultFormDataDecoder
from .encoder import DefaultFormDataEncoder, format_value
from .provider import DefaultFormDataProvider
from .validator import DefaultFormDataValidator

__all__ = [
    "Conformer",
    "DefaultFormDataDecoder",
    "DefaultFormDataEncoder",
    "DefaultFormDataProvider",
    "DefaultFormDataValidator",
    "format_value",
]
