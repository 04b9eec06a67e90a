"""
API Router Aggregator.

Combines all routers into a single router for the main app.
"""

from fastapi import APIRouter

from app.api.v1 import admin, applications, auth, candidates, dashboard, interviews, jobs

api_router = APIRouter()


@api_router.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


# Include all routers with their prefixes and tags
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["Jobs"],
)

api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"],
)

api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"],
)

api_router.include_router(
    interviews.router,
    prefix="/interviews",
    tags=["Interviews"],
)

api_router.include_router(
    dashboard.router,
    tags=["Dashboard"],
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
)
