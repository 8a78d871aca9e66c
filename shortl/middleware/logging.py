"""
Request logging middleware for FastAPI using Loguru.

Every request is logged at the REQUEST level with its method, path, status
code and processing time, and tagged with an X-Request-ID header.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware


def client_ip_of(request: Request) -> str:
    """Client IP, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one REQUEST record per handled request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

        response.headers["X-Request-ID"] = request_id

        log_record = {
            "request_id": request_id,
            "client_ip": client_ip_of(request),
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": process_time_ms,
        }
        if request.query_params:
            log_record["query_params"] = dict(request.query_params)

        logger.log("REQUEST", "{method} {path} {status_code} {process_time_ms}ms", **log_record)
        return response
