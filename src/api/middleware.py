import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("redcap.access")


def add_request_logging(app: FastAPI) -> None:
    """Log method, path, status and duration of every request. Bodies are never logged."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
