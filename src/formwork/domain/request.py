"""FormRequest — framework-neutral, pre-tokenised view of an HTTP request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

#: Methods whose requests carry a form submission.
SUBMISSION_METHODS = frozenset({"POST", "PUT", "PATCH"})


def default_values_factory() -> dict[str, list[str]]:
    return {}


def normalize_values(
    values: Mapping[str, str | Iterable[str]] | None,
) -> dict[str, list[str]]:
    """Coerce ``{name: str | [str, ...]}`` into ``{name: [str, ...]}``."""
    normalized: dict[str, list[str]] = {}
    for key, value in (values or {}).items():
        if isinstance(value, str):
            normalized[key] = [value]
        else:
            normalized[key] = [str(v) for v in value]
    return normalized


def is_submission(method: str) -> bool:
    """Return True for POST-like methods."""
    return method.upper() in SUBMISSION_METHODS


@dataclass(frozen=True)
class FormRequest:
    """In-memory request carrying already parsed form values.

    Useful for tests and for frameworks without a dedicated adapter.

    Usage::

        request = FormRequest.post({"firstname": "Ada", "tags": ["a", "b"]})
        form = await handler.handle_form(ctx, request)
    """

    method: str = "GET"
    values: dict[str, list[str]] = field(default_factory=default_values_factory)
    body: bytes = b""

    @classmethod
    def get(
        cls, values: Mapping[str, str | Iterable[str]] | None = None
    ) -> FormRequest:
        return cls(method="GET", values=normalize_values(values))

    @classmethod
    def post(
        cls,
        values: Mapping[str, str | Iterable[str]] | None = None,
        *,
        body: bytes = b"",
    ) -> FormRequest:
        return cls(method="POST", values=normalize_values(values), body=body)

    async def read_body(self) -> bytes:
        return self.body

    async def form_values(self) -> dict[str, list[str]]:
        return {key: list(items) for key, items in self.values.items()}
