"""Logging middleware for request tracking and structured logging."""

import json
import logging
import sys
import time
import uuid
from typing import Any, Awaitable, Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Send log records to stdout as bare messages; request logs are JSON already."""
    logging.basicConfig(
        level=level,
        format='%(message)s',
        stream=sys.stdout,
    )
    logging.getLogger().setLevel(level)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs one structured JSON line per request.

    Logs include:
    - Request ID (client-supplied X-Request-ID or a new UUID)
    - HTTP method and path
    - Status code and processing time
    - Client IP
    - Classification outcome (doc_type, confidence) when the route reports one

    Security notes:
    - Does NOT log document contents or request/response bodies
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Process request and log structured information."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        log_data: Dict[str, Any] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "user_ip": request.client.host if request.client else "unknown",
        }

        try:
            response = await call_next(request)
        except Exception as e:
            processing_time_ms = (time.time() - start_time) * 1000
            error_log = {
                **log_data,
                "status_code": 500,
                "processing_time_ms": round(processing_time_ms, 2),
                "error": str(e),
                "error_type": type(e).__name__,
                "message": f"Request failed: {request.method} {request.url.path}",
            }
            logger.error(json.dumps(error_log), exc_info=True)
            raise

        processing_time_ms = (time.time() - start_time) * 1000

        log_data.update({
            "status_code": response.status_code,
            "processing_time_ms": round(processing_time_ms, 2),
        })

        # Classification outcome reported by the route via headers
        if "X-Doc-Type" in response.headers:
            log_data["doc_type"] = response.headers["X-Doc-Type"]
        if "X-Confidence" in response.headers:
            try:
                log_data["confidence"] = float(response.headers["X-Confidence"])
            except (ValueError, TypeError):
                pass  # Ignore malformed confidence values

        logger.info(json.dumps(log_data))

        response.headers["X-Request-ID"] = request_id

        return response