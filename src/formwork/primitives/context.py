"""FormContext — request-scoped values plus cancellation."""

from __future__ import annotations

import time
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Any

from .exceptions import ContextCancelledError

if TYPE_CHECKING:
    from collections.abc import Mapping

#: ContextVar holding the context of the form handler currently running;
#: ``None`` outside of ``FormHandler.handle_*``.
_current_form_context: ContextVar[FormContext | None] = ContextVar(
    "current_form_context", default=None
)


def get_current_form_context() -> FormContext | None:
    """Return the active form context (or *None* outside a handler call)."""
    return _current_form_context.get()


def set_current_form_context(ctx: FormContext | None) -> Token[FormContext | None]:
    """Activate *ctx*; pass the returned token to :func:`reset_current_form_context`."""
    return _current_form_context.set(ctx)


def reset_current_form_context(token: Token[FormContext | None]) -> None:
    _current_form_context.reset(token)


class FormContext:
    """Carries request-scoped values and a cancellation signal.

    Stages receive the context as their first argument and may call
    :meth:`raise_if_cancelled` before expensive work.  A context is
    cancelled explicitly via :meth:`cancel` or implicitly once its
    *deadline* (a :func:`time.monotonic` timestamp) has passed.

    Usage::

        ctx = FormContext.with_timeout(2.0, session_id="abc")
        form = await handler.handle_form(ctx, request)
    """

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        *,
        deadline: float | None = None,
    ) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._deadline = deadline
        self._cancel_reason: str | None = None

    @classmethod
    def with_timeout(cls, seconds: float, **values: Any) -> FormContext:
        return cls(values, deadline=time.monotonic() + seconds)

    # ── Values ───────────────────────────────────────────────────

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    # ── Cancellation ─────────────────────────────────────────────

    def cancel(self, reason: str = "context cancelled") -> None:
        """Mark the context as cancelled; later checks raise."""
        if self._cancel_reason is None:
            self._cancel_reason = reason

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        if self._cancel_reason is not None:
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_cancelled(self) -> None:
        """Raise :class:`ContextCancelledError` if the context is done."""
        if self._cancel_reason is not None:
            raise ContextCancelledError(self._cancel_reason)
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise ContextCancelledError("context deadline exceeded")
