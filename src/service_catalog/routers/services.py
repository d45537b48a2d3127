"""CRUD endpoints over the in-memory service catalog."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from src.service_catalog.services.catalog_store import CatalogStore, parse_service_input
from src.shared.models.catalog import OkResponse, ServiceWriteResponse

router = APIRouter(prefix="/services", tags=["services"])


def _store(request: Request) -> CatalogStore:
    return request.app.state.store


@router.get("")
async def list_services(request: Request) -> list[dict[str, Any]]:
    """Return every stored service."""
    return [svc.to_wire() for svc in _store(request).list()]


@router.get("/{name}")
async def get_service(name: str, request: Request) -> dict[str, Any]:
    """Return a single stored service."""
    return _store(request).get(name).to_wire()


@router.post("", response_model=ServiceWriteResponse, status_code=201)
async def create_service(
    request: Request, payload: Any = Body(default=None)
) -> ServiceWriteResponse:
    """Create a service; metadata is assigned by the server."""
    service = parse_service_input(payload)
    stored = _store(request).create(service)
    return ServiceWriteResponse(service=stored.to_wire())


@router.put("/{name}", response_model=ServiceWriteResponse)
async def replace_service(
    name: str, request: Request, payload: Any = Body(default=None)
) -> ServiceWriteResponse:
    """Fully replace a service; ``body.name`` must equal the URL name."""
    service = parse_service_input(payload)
    stored = _store(request).replace(name, service)
    return ServiceWriteResponse(service=stored.to_wire())


@router.delete("/{name}", response_model=OkResponse)
async def delete_service(name: str, request: Request) -> OkResponse:
    """Delete a service."""
    _store(request).delete(name)
    return OkResponse()
