"""Starlette / FastAPI request adapter.

Example:
    ```python
    from fastapi import FastAPI, Request
    from formwork import FormContext
    from formwork.contrib.starlette import StarletteFormRequest

    app = FastAPI()

    @app.post("/contact")
    async def contact(request: Request):
        form = await handler.handle_form(FormContext(), StarletteFormRequest(request))
        if not form.is_valid:
            return {"errors": form.validation_info.field_errors}
        return {"ok": True}
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.datastructures import UploadFile

from ..primitives.exceptions import DecodeError

if TYPE_CHECKING:
    from starlette.requests import Request


class StarletteFormRequest:
    """Implements ``IFormRequest`` on top of a Starlette request.

    Body values (urlencoded or multipart) come first, followed by query
    string values.  Uploaded files are not form values and are skipped.
    """

    def __init__(self, request: Request) -> None:
        self._request = request

    @property
    def method(self) -> str:
        return self._request.method

    async def read_body(self) -> bytes:
        return await self._request.body()

    async def form_values(self) -> dict[str, list[str]]:
        values: dict[str, list[str]] = {}
        try:
            form = await self._request.form()
        except Exception as exc:
            raise DecodeError(f"Malformed form body: {exc}") from exc

        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                continue
            values.setdefault(key, []).append(value)
        for key, value in self._request.query_params.multi_items():
            values.setdefault(key, []).append(value)
        return values


__all__ = ["StarletteFormRequest"]
