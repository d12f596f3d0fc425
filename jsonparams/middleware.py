from __future__ import annotations

from typing import Any, Callable

import structlog
from starlette.datastructures import Headers
from starlette.requests import ClientDisconnect
from starlette.responses import JSONResponse

from jsonparams.observability.logging import PARAMS_LOGGER
from jsonparams.parsing import ParamsParseError, ParamsParser

STATE_KEY = "request_parameters"


class _BodyTooLarge(Exception):
    pass


def _error_response(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": {"code": code, "message": message}}, status_code=status_code)


class ParamsParserMiddleware:
    """Decodes registered request bodies into `request.state.request_parameters`.

    Only bodies whose content type has a parser are buffered; they are
    replayed to the wrapped app so handlers can still read the raw body.
    Parse failures are logged here and, with `show_exceptions`, rendered as a
    500 response instead of propagating to the server.
    """

    def __init__(
        self,
        app: Callable[..., Any],
        parser: ParamsParser | None = None,
        show_exceptions: bool = True,
        max_body_bytes: int = 0,
    ) -> None:
        self.app = app
        self.parser = parser or ParamsParser()
        self.show_exceptions = show_exceptions
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        content_type = Headers(scope=scope).get("content-type")
        if not self.parser.parses(content_type):
            await self.app(scope, receive, send)
            return

        try:
            body = await self._read_body(scope, receive)
        except ClientDisconnect:
            return
        except _BodyTooLarge:
            response = _error_response(
                "REQUEST_TOO_LARGE", f"Request body exceeds {self.max_body_bytes} bytes", 413
            )
            await response(scope, receive, send)
            return

        try:
            params = self.parser.parse(body, content_type)
        except ParamsParseError as exc:
            structlog.get_logger(PARAMS_LOGGER).error(
                ParamsParseError.message_prefix,
                content_type=exc.content_type,
                contents=exc.body,
                error=str(exc.cause),
            )
            if not self.show_exceptions:
                raise
            response = _error_response("PARAMS_PARSE_ERROR", str(exc), 500)
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})[STATE_KEY] = params
        await self.app(scope, _replay(body, receive), send)

    async def _read_body(self, scope: dict[str, Any], receive: Callable[..., Any]) -> bytes:
        limit = self.max_body_bytes
        declared = Headers(scope=scope).get("content-length")
        if limit and declared and declared.isdigit() and int(declared) > limit:
            raise _BodyTooLarge()

        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                raise ClientDisconnect()
            chunk = message.get("body", b"")
            size += len(chunk)
            if limit and size > limit:
                raise _BodyTooLarge()
            chunks.append(chunk)
            if not message.get("more_body", False):
                return b"".join(chunks)


def _replay(body: bytes, receive: Callable[..., Any]) -> Callable[..., Any]:
    sent = False

    async def replay_receive() -> dict[str, Any]:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay_receive
