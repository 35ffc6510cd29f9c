"""Form — the outcome of running a form handler against one request."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from .validation_info import ValidationInfo

T = TypeVar("T")


def _empty_extension_data() -> MappingProxyType[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Form(Generic[T]):
    """Decoded data plus validation outcome plus submission flag.

    ``data`` is whatever the provider/decoder produced: a pydantic model
    for typed forms or a ``dict[str, str]`` for the default pipeline.
    Extension data is kept apart from ``data`` under the extension name.
    ``validation_info`` is stored as a read-only copy, so findings cannot
    be added to a form once it exists.  ``data`` itself is not copied.
    """

    data: T
    is_submitted: bool = False
    validation_info: ValidationInfo = field(default_factory=ValidationInfo)
    extension_data: MappingProxyType[str, Any] = field(
        default_factory=_empty_extension_data
    )

    def __post_init__(self) -> None:
        if not self.validation_info.read_only:
            object.__setattr__(
                self, "validation_info", self.validation_info.read_only_copy()
            )
        if not isinstance(self.extension_data, MappingProxyType):
            object.__setattr__(
                self, "extension_data", MappingProxyType(dict(self.extension_data))
            )

    @property
    def is_valid(self) -> bool:
        return self.validation_info.is_valid

    @property
    def is_valid_and_submitted(self) -> bool:
        """True only for a submission without findings."""
        return self.is_submitted and self.is_valid

    def get_extension_data(self, name: str, default: Any = None) -> Any:
        return self.extension_data.get(name, default)
