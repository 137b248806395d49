"""Middleware for adding a request ID and logging requests/responses."""
import logging
import time
from uuid import uuid4

from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestIDMiddleware:
    """Assigns or propagates ``X-Request-ID`` and logs each request."""

    SLOW_REQUEST_THRESHOLD = 1.0

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        logger.info(f"Incoming request {request.method} {request.url.path} [{request_id}]")
        start_time = time.time()

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = message.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode()))
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        except Exception as e:
            logger.error(
                f"Request failed {request.method} {request.url.path} [{request_id}]: "
                f"{type(e).__name__}: {str(e)}"
            )
            raise

        process_time = time.time() - start_time
        if process_time > self.SLOW_REQUEST_THRESHOLD:
            logger.warning(f"Slow request {request.method} {request.url.path} [{request_id}] took {process_time:.3f}s")
        logger.info(f"Request completed {request.method} {request.url.path} [{request_id}] in {process_time:.3f}s")
