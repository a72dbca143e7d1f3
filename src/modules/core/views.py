"""Operational endpoints and the shared domain-error translation."""

import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response

from modules.core.exceptions import Conflict, DomainError, NotFound, ReferenceNotFound

logger = structlog.get_logger(__name__)


def _check_database() -> Dict[str, Any]:
    start = time.monotonic()
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Report database reachability; 503 when it is down."""
    services: Dict[str, Dict[str, Any]] = {}

    try:
        services["database"] = _check_database()
    except DatabaseError:
        logger.exception("health.database_down")
        services["database"] = {"status": "down"}

    healthy = all(s["status"] == "up" for s in services.values())
    overall = "healthy" if healthy else "unhealthy"
    logger.info("health.checked", status=overall)

    return JsonResponse(
        {
            "status": overall,
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


def domain_error_response(exc: DomainError) -> Response:
    """Translate a domain exception into a ``{"detail", "code"}`` response.

    Lookups by id map to 404, state collisions to 409 and every other
    business-rule violation to 400.
    """
    if isinstance(exc, (NotFound, ReferenceNotFound)):
        http_status = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, Conflict):
        http_status = status.HTTP_409_CONFLICT
    else:
        http_status = status.HTTP_400_BAD_REQUEST
    logger.warning("api.domain_error", code=exc.code, detail=str(exc))
    return Response({"detail": str(exc), "code": exc.code}, status=http_status)
