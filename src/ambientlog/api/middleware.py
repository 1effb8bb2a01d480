"""Request boundary middleware for the ambient log context."""

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ambientlog.context.log_context import ContextStack, log_context
from ambientlog.core.settings import get_settings

logger = structlog.get_logger(__name__)


class LogContextMiddleware(BaseHTTPMiddleware):
    """
    Start every request with a clean ambient context.

    This middleware:
    - Resets the ambient stack (a request is a fresh unit of work)
    - Pushes ``request_id`` (from the request header or a new uuid4),
      ``http_method`` and ``http_path``
    - Echoes the request id on the response
    - Pops those properties again when the request is done

    Meant for the ambient ``log_context``; passing a shared stack would clear
    it for every flow on each request.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        stack: ContextStack | None = None,
        header: str | None = None,
    ):
        super().__init__(app)
        self.stack = stack or log_context
        self.header = header or get_settings().request_id_header

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(self.header) or str(uuid.uuid4())

        self.stack.reset()
        with self.stack.push_properties(
            request_id=request_id,
            http_method=request.method,
            http_path=request.url.path,
        ):
            logger.info("request_started")
            try:
                response = await call_next(request)
            except Exception as e:
                logger.exception("request_failed", error=str(e))
                raise

            logger.info("request_completed", status_code=response.status_code)
            response.headers[self.header] = request_id
            return response


__all__ = ["LogContextMiddleware"]
