import time
import uuid
from contextvars import ContextVar
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class CorrelationIdMiddleware:
    """Tag every request with a correlation ID and log its outcome.

    The ID comes from the ``X-Request-ID`` header or is a fresh UUID4.
    It is bound into structlog's contextvars together with the method
    and path, so every event logged while serving the request (service
    and repository events included) carries them.  The same ID is echoed
    back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=cid,
            method=request.method,
            path=request.path,
        )

        start = time.monotonic()
        response = self.get_response(request)
        duration_ms = round((time.monotonic() - start) * 1000, 2)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "http.request_finished",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        response[REQUEST_ID_HEADER] = cid
        return response
