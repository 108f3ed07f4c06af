"""
Health Check Route
"""

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """
    Health Check

    Used for service liveness probe. Does not touch the storage backend.
    """
    return {
        "status": "healthy",
        "storage": request.app.state.storage_backend.name,
    }
