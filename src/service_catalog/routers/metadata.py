"""Service metadata schema endpoints: publish and validate against it."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body
from pydantic import BaseModel

from src.service_catalog.services.catalog_store import parse_service_input
from src.shared.errors import NotFoundError
from src.shared.models.catalog import OkResponse, ServiceInput

router = APIRouter(prefix="/metadata", tags=["metadata"])

LATEST_SCHEMA_VERSION = "latest"

_SCHEMAS: dict[str, type[BaseModel]] = {
    LATEST_SCHEMA_VERSION: ServiceInput,
}


def _schema_model(version: str) -> type[BaseModel]:
    model = _SCHEMAS.get(version)
    if model is None:
        raise NotFoundError(detail=f"Schema version '{version}' not found")
    return model


@router.get("/schema")
async def get_latest_schema() -> dict[str, Any]:
    """JSON Schema for service input documents."""
    return _schema_model(LATEST_SCHEMA_VERSION).model_json_schema()


@router.get("/schema/{version}")
async def get_schema(version: str) -> dict[str, Any]:
    return _schema_model(version).model_json_schema()


@router.post("/validate", response_model=OkResponse)
async def validate_latest(payload: Any = Body(default=None)) -> OkResponse:
    """Validate a service document without storing it."""
    parse_service_input(payload)
    return OkResponse()


@router.post("/validate/{version}", response_model=OkResponse)
async def validate_version(version: str, payload: Any = Body(default=None)) -> OkResponse:
    """Validate against *version*; unknown versions are 404."""
    _schema_model(version)
    parse_service_input(payload)
    return OkResponse()
