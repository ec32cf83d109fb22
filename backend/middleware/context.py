import time
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from config import logger

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every request with an X-Request-ID and logs its duration."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start = time.perf_counter()

        logger.info("Request %s started: %s %s", request_id, request.method, request.url.path)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        duration = time.perf_counter() - start
        logger.info(
            "Request %s completed: status=%s duration_ms=%.2f",
            request_id, response.status_code, duration * 1000
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response

def get_request_id() -> Optional[str]:
    return request_id_var.get()
