"""
Centralized error handling.

Every exception raised by a route handler or by the request pipeline
ends up in ``handle_unhandled_error``, which logs it with the request
context and returns the generic JSON error body.  The HTTP status is
taken from the exception's ``status`` or ``status_code`` attribute when
it declares one and defaults to 500.  Exception details are only sent
to clients outside production.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from blog_api.app.core.config import Settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class FrontendAssetsMissingError(Exception):
    """The static frontend directory or its index document does not exist."""

    status = status.HTTP_404_NOT_FOUND

    def __init__(self, path: str) -> None:
        super().__init__(f"Frontend asset not found: {path}")
        self.path = path


def declared_status(exc: BaseException) -> int:
    """Return the HTTP status an exception asks for, or 500."""
    for attr in ("status", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and 400 <= value <= 599:
            return value
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_details(exc: BaseException) -> Dict[str, Any]:
    details: Dict[str, Any] = {"type": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, RequestValidationError):
        details["errors"] = jsonable_encoder(exc.errors())
    return details


def _decode_body(body: Optional[bytes]) -> str:
    if not body:
        return ""
    return body.decode("utf-8", errors="replace")


def handle_unhandled_error(
    request: Request,
    exc: BaseException,
    app_settings: Settings,
    body: Optional[bytes] = None,
    status_code: Optional[int] = None,
) -> JSONResponse:
    """Log ``exc`` with request context and build the error response."""
    client = request.client.host if request.client else None
    logger.error(
        "Unhandled Error: %s | path=%s method=%s body=%s ip=%s",
        exc,
        request.url.path,
        request.method,
        _decode_body(body),
        client,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=status_code or declared_status(exc),
        content={
            "message": GENERIC_ERROR_MESSAGE,
            "error": {} if app_settings.is_production else error_details(exc),
        },
    )


class ErrorHandlingMiddleware:
    """ASGI middleware routing exceptions to ``handle_unhandled_error``.

    The body chunks read by the wrapped application are recorded so the
    error log can include the request body.  If the response has already
    started nothing can be sent any more and the exception is re-raised.
    """

    def __init__(self, app: ASGIApp, app_settings: Settings) -> None:
        self.app = app
        self.app_settings = app_settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        body = bytearray()
        response_started = False

        async def receive_recording() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                body.extend(message.get("body", b""))
            return message

        async def send_tracking(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive_recording, send_tracking)
        except Exception as exc:
            if response_started:
                raise
            response = handle_unhandled_error(Request(scope), exc, self.app_settings, body=bytes(body))
            await response(scope, receive, send)


def register_error_handlers(app: FastAPI, app_settings: Settings) -> None:
    """Attach the request validation handler to ``app``.

    Malformed or wrongly typed request bodies are reported with status
    400.  Other exceptions are handled by ``ErrorHandlingMiddleware``,
    which ``create_app`` installs around the router and around the
    whole middleware stack.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return handle_unhandled_error(
            request,
            exc,
            app_settings,
            body=await request.body(),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
