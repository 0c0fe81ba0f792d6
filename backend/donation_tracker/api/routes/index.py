"""API Index & Fallback — endpoint map at / and a 404 envelope for unknown /api paths.

Invariants:
    - The fallback router is included LAST so real /api routes take precedence
"""

from fastapi import APIRouter, Request, status

from donation_tracker.api.envelope import envelope_response
from donation_tracker.config import get_settings

AVAILABLE_ENDPOINTS = [
    "GET /api/health",
    "GET /api/donations",
    "POST /api/donations",
    "PUT /api/donations/:id",
    "DELETE /api/donations/:id",
    "GET /api/donations/:id",
]

router = APIRouter(tags=["index"])
fallback_router = APIRouter(prefix="/api", include_in_schema=False)


@router.get("/")
async def api_index():
    settings = get_settings()
    return {
        "message": settings.api_title,
        "version": settings.api_version,
        "endpoints": {
            "health": "/api/health",
            "donations": {
                "getAll": "GET /api/donations",
                "create": "POST /api/donations",
                "update": "PUT /api/donations/:id",
                "delete": "DELETE /api/donations/:id",
                "getById": "GET /api/donations/:id",
            },
        },
    }


@fallback_router.api_route(
    "/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
)
async def unknown_api_endpoint(request: Request, path: str):
    return envelope_response(
        status.HTTP_404_NOT_FOUND,
        False,
        data={"availableEndpoints": AVAILABLE_ENDPOINTS},
        message=f"API endpoint not found: {request.method} {request.url.path}",
    )
