"""CSRF token extension.

Provides the expected token for rendering, reads the submitted token and
reports a struct error when the two differ.

Usage::

    async def session_token(ctx, request):
        return ctx.get("session").csrf_token

    handler = (
        FormHandlerBuilder()
        .add_form_extension(CsrfTokenExtension(session_token), name="csrf")
        .build()
    )
"""

from __future__ import annotations

import inspect
import logging
import secrets
from typing import TYPE_CHECKING, Any

from ..domain.validation_info import ValidationInfo

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping, Sequence

    from ..ports.request import IFormRequest
    from ..ports.validation import IValidatorProvider
    from ..primitives.context import FormContext

    TokenSource = Callable[
        [FormContext, IFormRequest], "str | None | Awaitable[str | None]"
    ]

logger = logging.getLogger(__name__)

DEFAULT_FIELD_NAME = "csrftoken"
INVALID_TOKEN_KEY = "formError.csrfToken.invalid"
INVALID_TOKEN_LABEL = "Invalid CSRF token"


def generate_csrf_token(nbytes: int = 32) -> str:
    """Return a new URL-safe random token."""
    return secrets.token_urlsafe(nbytes)


class CsrfTokenExtension:
    """Form extension implementing provider, decoder and validator roles.

    *token_source* returns the token expected for the current request
    (sync or async); ``None`` means no token is known, which makes every
    submission invalid.
    """

    def __init__(
        self, token_source: TokenSource, *, field_name: str = DEFAULT_FIELD_NAME
    ) -> None:
        self._token_source = token_source
        self.field_name = field_name

    async def expected_token(self, ctx: FormContext, request: IFormRequest) -> str:
        token = self._token_source(ctx, request)
        if inspect.isawaitable(token):
            token = await token
        return token or ""

    async def get_form_data(
        self, ctx: FormContext, request: IFormRequest
    ) -> dict[str, str]:
        return {self.field_name: await self.expected_token(ctx, request)}

    async def decode(
        self,
        ctx: FormContext,
        request: IFormRequest,
        values: Mapping[str, Sequence[str]],
        form_data: Any,
    ) -> dict[str, str]:
        submitted = values.get(self.field_name) or [""]
        return {self.field_name: submitted[0]}

    async def validate(
        self,
        ctx: FormContext,
        request: IFormRequest,
        validator_provider: IValidatorProvider,
        form_data: Any,
    ) -> ValidationInfo:
        submitted = form_data.get(self.field_name, "") if form_data else ""
        expected = await self.expected_token(ctx, request)
        if expected and secrets.compare_digest(
            submitted.encode("utf-8"), expected.encode("utf-8")
        ):
            return ValidationInfo.success()

        logger.info("Rejected form submission with invalid CSRF token")
        info = ValidationInfo.success()
        info.add_struct_error(INVALID_TOKEN_KEY, INVALID_TOKEN_LABEL)
        return info
