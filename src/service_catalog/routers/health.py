"""Health check endpoint for the Service Catalog."""
from __future__ import annotations

from fastapi import APIRouter

from src.shared.models.catalog import OkResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=OkResponse)
async def health() -> OkResponse:
    """Liveness probe."""
    return OkResponse()
