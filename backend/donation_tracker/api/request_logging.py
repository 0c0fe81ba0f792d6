"""Request Logging — one structured log line per HTTP request."""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("donation_tracker.requests")


def register_request_logging(app: FastAPI) -> None:
    """Log method, path, status_code and duration_ms for every request."""

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
