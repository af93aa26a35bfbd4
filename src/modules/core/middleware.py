"""Request context middleware.

Every request gets a correlation id (the client's ``X-Request-ID`` or a
fresh UUID4) bound into structlog's contextvars, so all log lines of the
request carry it.  One access line is written when the request ends.
"""

import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=request_id,
            method=request.method,
            path=request.path,
        )
        logger.info("request_started", query=request.META.get("QUERY_STRING", ""))
        started = time.perf_counter()

        response = self.get_response(request)

        log = logger.error if response.status_code >= 500 else logger.info
        log(
            "request_finished",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        response[REQUEST_ID_HEADER] = request_id
        return response
