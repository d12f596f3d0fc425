from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fastapi import Depends, Request
from starlette.datastructures import UploadFile

from jsonparams.middleware import STATE_KEY
from jsonparams.parsing.mime import FORM_URLENCODED, MULTIPART_FORM, split_content_type

_FORM_TYPES = {*FORM_URLENCODED.all_strings, *MULTIPART_FORM.all_strings}


def _collect(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for key, value in items:
        if key in params:
            existing = params[key]
            params[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            params[key] = value
    return params


def get_query_parameters(request: Request) -> dict[str, Any]:
    return _collect(request.query_params.multi_items())


async def get_request_parameters(request: Request) -> dict[str, Any]:
    """Body parameters: decoded by the parser middleware, or form fields."""

    parsed = getattr(request.state, STATE_KEY, None)
    if parsed is not None:
        return parsed

    media_type, _ = split_content_type(request.headers.get("content-type"))
    if media_type in _FORM_TYPES:
        form = await request.form()
        return _collect((key, value) for key, value in form.multi_items() if not isinstance(value, UploadFile))
    return {}


def get_parameters(
    query: dict[str, Any] = Depends(get_query_parameters),
    body: dict[str, Any] = Depends(get_request_parameters),
) -> dict[str, Any]:
    return {**query, **body}
