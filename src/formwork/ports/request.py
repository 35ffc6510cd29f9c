"""IFormRequest — the slice of an HTTP request the pipeline consumes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


@runtime_checkable
class IFormRequest(Protocol):
    """Protocol for inbound requests.

    The pipeline never parses raw bytes; adapters expose a pre-tokenised
    ``{field name: [values, ...]}`` view through :meth:`form_values`.
    """

    @property
    def method(self) -> str:
        """HTTP method / verb, e.g. ``"GET"`` or ``"POST"``."""
        ...

    async def read_body(self) -> bytes:
        """Return the raw request body (empty for bodiless requests)."""
        ...

    async def form_values(self) -> Mapping[str, Sequence[str]]:
        """Return the submitted values.

        May raise if the body is malformed; the handler reports such
        failures as :class:`~formwork.primitives.exceptions.DecodeError`.
        """
        ...
