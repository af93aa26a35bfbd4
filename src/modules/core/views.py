import time
from typing import Any, Dict

import structlog
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    healthy = True

    try:
        start = time.monotonic()
        conn = connections["default"]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        services["database"] = {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except DatabaseError:
        services["database"] = {"status": "down"}
        healthy = False
        logger.error("health_check_db_failure", exc_info=True)

    logger.info("health_check_completed", status="OK" if healthy else "DEGRADED")

    return JsonResponse(
        {
            "status": "OK" if healthy else "DEGRADED",
            "message": (
                "Product API is running"
                if healthy
                else "Product API is running without a database"
            ),
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )


def route_not_found(request: HttpRequest, exception: Exception) -> JsonResponse:
    """``handler404``: unknown routes answer in the catalog envelope."""
    return JsonResponse(
        {"success": False, "error": "RouteNotFound", "message": "Route not found."},
        status=404,
    )


def server_error(request: HttpRequest) -> JsonResponse:
    """``handler500`` for failures outside the DRF views."""
    return JsonResponse(
        {
            "success": False,
            "error": "InternalServerError",
            "message": "Internal server error.",
        },
        status=500,
    )
