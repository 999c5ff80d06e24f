"""Observability – correlation-id ASGI middleware."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


class CorrelationIdMiddleware:
    """Bind a correlation id to every log line of a request.

    Header resolution order:
    1. ``X-Correlation-ID``
    2. ``X-Request-ID``
    3. Generated UUID v4

    The id is echoed back in the response ``X-Correlation-ID`` header.
    """

    def __init__(
        self,
        app: "ASGIApp",
        header_name: str = "X-Correlation-ID",
        fallback_headers: tuple[str, ...] = ("X-Request-ID",),
    ) -> None:
        self.app = app
        self._response_header = header_name.lower().encode()
        self._request_headers: list[bytes] = [
            header_name.lower().encode(),
            *[h.lower().encode() for h in fallback_headers],
        ]

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        correlation_id: str | None = None
        for header in self._request_headers:
            value = headers.get(header, b"").decode().strip()
            if value:
                correlation_id = value
                break
        correlation_id = correlation_id or str(uuid4())

        encoded_id = correlation_id.encode()
        response_header = self._response_header

        async def send_with_header(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers_list: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers_list.append((response_header, encoded_id))
                message = {**message, "headers": headers_list}
            await send(message)

        with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
            await self.app(scope, receive, send_with_header)


__all__ = ["CorrelationIdMiddleware"]
