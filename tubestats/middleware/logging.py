"""Structured logging middleware using structlog.

Configures structlog for JSON output and provides ASGI middleware
that logs every request with method, path, status, and duration.

Raw client IPs are hashed before logging and query strings (channel
filters, date ranges) are never logged.
"""

import hashlib
import logging
import sys
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


def configure_logging(log_level: str = "info", service: str = "tubestats") -> None:
    """Initialize structlog with JSON rendering and level filtering.

    Stdlib loggers used by the service modules go through the same
    processors, so stdout carries one JSON object per line.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*shared_processors, structlog.stdlib.add_logger_name],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    structlog.contextvars.bind_contextvars(service=service)


def _hash_ip_for_log(ip: str) -> str:
    """Produce a short, irreversible hash prefix of an IP for log correlation."""
    return hashlib.sha256(ip.encode()).hexdigest()[:12]


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """ASGI middleware that logs each request as structured JSON."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        logger = structlog.get_logger()

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start) * 1000)
        status = response.status_code

        log_method = logger.info
        if status >= 500:
            log_method = logger.error
        elif status >= 400:
            log_method = logger.warning

        raw_ip = request.client.host if request.client else "unknown"

        log_method(
            "request",
            method=request.method,
            path=request.url.path,
            status=status,
            duration_ms=duration_ms,
            ip_hash=_hash_ip_for_log(raw_ip),
        )

        return response
