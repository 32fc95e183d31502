"""
HTTP API Endpoints

REST API for editor auth and the three content kinds.
"""

from fastapi import APIRouter

from cms.content_kinds import ContentKind
from cms.http.api.auth import router as auth_router
from cms.http.api.content import build_content_router

__all__ = ["router"]

# Combined router
router = APIRouter()
router.include_router(auth_router, prefix="/api/auth", tags=["auth"])
for _kind in ContentKind:
    router.include_router(
        build_content_router(_kind),
        prefix=f"/api/{_kind.route}",
        tags=[_kind.route],
    )
