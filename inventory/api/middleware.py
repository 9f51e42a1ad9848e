import logging
import time

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from inventory.config import Settings
from inventory.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)

# Defaults applied to every response unless a route already set them
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-XSS-Protection": "0",
}


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``settings.MAX_BODY_SIZE``.

    A declared Content-Length over the limit is refused before the app runs.
    Bodies without one (chunked uploads) are counted as they are received,
    and reading stops with a 413 once the limit is passed.
    """

    def __init__(self, app: ASGIApp, settings: Settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.settings.MAX_BODY_SIZE
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            logger.warning(f"Rejected {scope['method']} {scope['path']}: body of {content_length} bytes")
            exc = PayloadTooLargeError()
            response = JSONResponse(status_code=exc.status_code, content=exc.to_dict())
            await response(scope, receive, send)
            return

        received = 0

        async def receive_limited() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    logger.warning(f"Rejected {scope['method']} {scope['path']}: streamed body over {limit} bytes")
                    raise HTTPException(status_code=PayloadTooLargeError.status_code, detail=PayloadTooLargeError.message)
            return message

        await self.app(scope, receive_limited, send)


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Install the body size limit, security headers and, in development, request logging."""
    app.add_middleware(BodySizeLimitMiddleware, settings=settings)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    if settings.ENVIRONMENT == "development":

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({elapsed_ms:.1f}ms)")
            return response
