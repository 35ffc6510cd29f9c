import time

import pytest

from formwork import ContextCancelledError, FormContext, get_current_form_context


def test_values_are_copied() -> None:
    source = {"session": "abc"}
    ctx = FormContext(source)
    source["session"] = "changed"

    assert ctx.get("session") == "abc"
    assert ctx.get("missing", 1) == 1

    values = ctx.values
    values["session"] = "mutated"
    assert ctx.get("session") == "abc"


def test_cancel_raises_with_first_reason() -> None:
    ctx = FormContext()
    assert not ctx.cancelled
    ctx.raise_if_cancelled()

    ctx.cancel("client went away")
    ctx.cancel("second reason")

    assert ctx.cancelled
    with pytest.raises(ContextCancelledError, match="client went away"):
        ctx.raise_if_cancelled()


def test_deadline_in_the_past_is_cancelled() -> None:
    ctx = FormContext(deadline=time.monotonic() - 1)

    assert ctx.cancelled
    with pytest.raises(ContextCancelledError, match="deadline"):
        ctx.raise_if_cancelled()


def test_with_timeout() -> None:
    ctx = FormContext.with_timeout(60, user="ada")

    assert ctx.get("user") == "ada"
    assert ctx.deadline is not None
    assert not ctx.cancelled


def test_no_current_context_outside_handler() -> None:
    assert get_current_form_context() is None
