"""Error envelope rendering and the request body ceiling."""

from __future__ import annotations

import logging

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from slip_parser.core.errors import PayloadTooLargeError, SlipParserError
from slip_parser.core.request_context import RequestContext
from slip_parser.services.slip.contracts import ErrorResponse

logger = logging.getLogger(__name__)


def scope_request_context(scope: Scope) -> RequestContext:
    """Return the request's ``RequestContext``, creating it on first use.

    Stored in ``scope["state"]`` so ``request.state.ctx`` sees the same object.
    """
    state = scope.setdefault("state", {})
    ctx = state.get("ctx")
    if ctx is None:
        ctx = RequestContext()
        state["ctx"] = ctx
    return ctx


def error_response(ctx: RequestContext, exc: SlipParserError) -> JSONResponse:
    payload = ErrorResponse(
        request_id=ctx.request_id,
        error=exc.public_message,
        process_time_ms=ctx.elapsed_ms(),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=payload.model_dump(by_alias=True),
        headers={"X-Request-ID": ctx.request_id},
    )


class BodySizeLimitMiddleware:
    """Reject request bodies larger than ``max_body_bytes`` with 413.

    A declared ``Content-Length`` is checked up front. Without one (chunked
    upload) the body is read and counted before the app sees it, then
    replayed to the app in a single message.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            if content_length.isdigit() and int(content_length) > self.max_body_bytes:
                await self._reject(scope, receive, send, int(content_length))
                return
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_body_bytes:
                await self._reject(scope, receive, send, received)
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        ctx = scope_request_context(scope)
        logger.warning(
            "request.payload_too_large",
            extra={"requestId": ctx.request_id, "receivedBytes": size, "maxBodyBytes": self.max_body_bytes},
        )
        response = error_response(ctx, PayloadTooLargeError())
        await response(scope, receive, send)
