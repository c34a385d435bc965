"""
Health check endpoints.

Liveness probes used by load balancers and the frontend.
"""

from typing import Any

from fastapi import APIRouter

router = APIRouter(tags=["health"])

SERVICE_NAME = "chat0-backend"


@router.get("/")
async def root() -> dict[str, Any]:
    """Root probe confirming the backend is up."""
    return {
        "message": "Chat0 backend is running!",
        "status": "ok",
    }


@router.get("/api/health")
async def healthcheck() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
    }
