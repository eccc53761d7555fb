"""
Structured Logging Middleware

One JSON access line per request, tagged with the request ID and the
region/language RegionMiddleware resolved for it. The request ID lives in
a ContextVar so every log line written while handling the request
(including side-channel failures dispatched from it) carries the same ID.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from regional_blog.middleware.region import client_ip

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# LogRecord attributes copied into the JSON payload when present
EXTRA_FIELDS = ("method", "path", "status_code", "duration_ms", "client_ip", "region", "language", "error_code")

QUIET_PATHS = frozenset({"/health", "/"})


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """JSON lines for log aggregation (Loki, CloudWatch, ELK)."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, logger_name: str = "regional_blog.access"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            self._log_request(request, 500, start_time, error=str(e))
            raise

        response.headers["X-Request-ID"] = request_id
        self._log_request(request, response.status_code, start_time)
        return response

    def _log_request(self, request: Request, status_code: int, start_time: float, error: str | None = None) -> None:
        if request.url.path in QUIET_PATHS:
            return

        duration_ms = (time.perf_counter() - start_time) * 1000
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip(request) or "unknown",
        }
        # Absent when RegionMiddleware is not installed
        context = getattr(request.state, "locale_context", None)
        if context is not None:
            extra["region"] = context.region
            extra["language"] = context.language

        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"
        if error:
            message += f" - Error: {error}"
        self.logger.log(level, message, extra=extra)


def setup_structured_logging(log_level: str = "INFO", json_format: bool = True, log_file: str | None = None) -> None:
    """
    Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
        json_format: JSON lines (production) or a plain text line (local)
        log_file: Optional file path instead of stderr
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"))
    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)

    for logger_name, level in {
        "regional_blog": log_level,
        "regional_blog.access": log_level,
        "regional_blog.tracking": log_level,
        "uvicorn.access": "WARNING",
        "sqlalchemy.engine": "WARNING",
    }.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))
