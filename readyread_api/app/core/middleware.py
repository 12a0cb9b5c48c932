"""
Read and write deadlines for HTTP requests.

uvicorn bounds idle keep‑alive connections and header size but not the
time spent reading a body or producing a response.
``RequestTimeoutMiddleware`` adds both:

* every ``receive()`` of the request body must complete within
  ``read_timeout`` seconds, otherwise the request fails with 408;
* the response must start within ``write_timeout`` seconds of
  dispatch, otherwise the client gets 503.

Both errors use the standard JSON envelope.  If the deadline passes
after the response has started, the connection is left to the server
to close.
"""

import asyncio
import json
import logging

from fastapi import HTTPException, status
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import error_envelope


class RequestTimeoutMiddleware:
    """Pure ASGI middleware enforcing per‑request read/write deadlines."""

    def __init__(self, app: ASGIApp, read_timeout: float, write_timeout: float) -> None:
        self.app = app
        self.read_timeout = read_timeout
        self.write_timeout = write_timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        logger = logging.getLogger(__name__)
        response_started = False

        async def timed_receive() -> Message:
            try:
                return await asyncio.wait_for(receive(), self.read_timeout)
            except asyncio.TimeoutError:
                raise HTTPException(
                    status_code=status.HTTP_408_REQUEST_TIMEOUT,
                    detail="request body was not received in time",
                ) from None

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, timed_receive, tracking_send), self.write_timeout)
        except asyncio.TimeoutError:
            logger.warning("%s %s exceeded write timeout of %ss", scope.get("method"), scope.get("path"), self.write_timeout)
            if response_started:
                return
            await self._send_timeout(send)

    @staticmethod
    async def _send_timeout(send: Send) -> None:
        code = status.HTTP_503_SERVICE_UNAVAILABLE
        body = json.dumps(
            error_envelope(code, "request timed out", "the server did not produce a response in time")
        ).encode("utf-8")
        await send(
            {
                "type": "http.response.start",
                "status": code,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode("latin-1")),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
