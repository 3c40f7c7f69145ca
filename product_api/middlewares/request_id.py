from __future__ import annotations

from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from product_api.core.logging import get_logger

logger = get_logger(__name__)


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "request start %s %s",
            request.method,
            request.url.path,
            extra={"requestId": request_id},
        )

        try:
            response: Response = await call_next(request)
        except Exception:
            # The 500 response is rendered outside this middleware and sets the header itself.
            logger.info(
                "request end %s %s -> unhandled exception",
                request.method,
                request.url.path,
                extra={"requestId": request_id},
            )
            raise
        response.headers["X-Request-Id"] = request_id

        logger.info(
            "request end %s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={"requestId": request_id},
        )

        return response
