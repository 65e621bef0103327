from __future__ import annotations

import logging
import re
import time
from typing import Callable, Optional
from uuid import uuid4

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from kmeta.api.models import ApiError

log = logging.getLogger("kmeta.api")

_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


class BodyTooLarge(HTTPException):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(status_code=413, detail=f"request body exceeds {max_bytes} bytes")


def body_too_large_response(exc: BodyTooLarge) -> JSONResponse:
    body = ApiError(error="BodyTooLarge", detail=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


class BodySizeLimitMiddleware:
    """Cap request bodies at max_bytes.

    A declared Content-Length over the cap is rejected before the app runs.
    Chunked bodies carry no length, so every http.request message is counted
    as it is received and BodyTooLarge is raised once the total passes the
    cap.
    """

    def __init__(self, app: ASGIApp, *, max_bytes: int) -> None:
        self.app = app
        self._max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self._max_bytes:
            response = body_too_large_response(BodyTooLarge(self._max_bytes))
            await response(scope, receive, send)
            return

        received = 0

        async def receive_counted() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self._max_bytes:
                    raise BodyTooLarge(self._max_bytes)
            return message

        await self.app(scope, receive_counted, send)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request and its response with X-Request-ID.

    Caller ids are reused only if they are short tokens of [A-Za-z0-9._-],
    so they can be written to logs as-is.
    """

    def __init__(self, app, *, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable):
        supplied = request.headers.get(self._header_name, "")
        request.state.request_id = supplied if _REQUEST_ID.match(supplied) else uuid4().hex
        response: Response = await call_next(request)
        response.headers[self._header_name] = request.state.request_id
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One "api_request" record per request; 5xx and failures log at WARNING."""

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.monotonic()
        response: Optional[Response] = None
        try:
            response = await call_next(request)
            return response
        finally:
            status_code = response.status_code if response is not None else None
            level = logging.INFO if status_code is not None and status_code < 500 else logging.WARNING
            log.log(
                level,
                "api_request",
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "client": request.client.host if request.client else None,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": int((time.monotonic() - start) * 1000),
                },
            )
