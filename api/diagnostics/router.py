"""
Liveness endpoints and the catch-all for unknown routes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from core import settings
from core.errors import error_response

logger = logging.getLogger(__name__)

AVAILABLE_ROUTES = [
    "/api/health",
    "/api/test",
    "/api/auth/login",
    "/api/auth/register",
    "/api/customers",
    "/api/kalkulationen",
    "/api/kalkulationen/stats",
    "/api/onboarding",
]

router = APIRouter()

# Included last by the app: matches whatever no other route matched.
fallback_router = APIRouter()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/health")
def health() -> dict:
    return {
        "ok": True,
        "message": "Backend OK",
        "timestamp": _now_iso(),
        "env": settings.app_env(),
    }


@router.get("/test")
def test() -> dict:
    return {
        "message": "Backend läuft!",
        "timestamp": _now_iso(),
        "environment": "docker",
    }


@fallback_router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
async def route_not_found(request: Request, path: str) -> JSONResponse:
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    logger.info("route_not_found method=%s path=%s", request.method, target)
    return error_response(
        404,
        f"Route nicht gefunden: {target}",
        available_routes=AVAILABLE_ROUTES,
    )
