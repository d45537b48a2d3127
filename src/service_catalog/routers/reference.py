"""Reference data: pillars, teams, and service-name domains."""
from __future__ import annotations

from fastapi import APIRouter

from src.shared.constants import PILLARS, SERVICE_NAME_DOMAINS

router = APIRouter(prefix="/reference", tags=["reference"])


@router.get("/teams")
async def teams() -> list[dict[str, str]]:
    """Every team with the pillar it belongs to."""
    return [
        {"name": team, "pillar": pillar}
        for pillar, members in PILLARS.items()
        for team in members
    ]


@router.get("/pillars")
async def pillars() -> dict[str, list[str]]:
    return PILLARS


@router.get("/domains")
async def domains() -> list[str]:
    return SERVICE_NAME_DOMAINS
