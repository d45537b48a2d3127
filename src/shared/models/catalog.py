"""Service catalog Pydantic v2 data models (client input and stored form)."""
from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints

NonEmptyString = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Contract(BaseModel):
    """An interface a service exposes.  Unknown keys are passed through."""
    role: str | None = None
    protocol: str | None = None
    url: str | None = None

    model_config = {"extra": "allow"}


class Dependency(BaseModel):
    """A declared service-to-service dependency."""
    name: NonEmptyString
    role: str | None = None
    protocol: str | None = None

    model_config = {"extra": "allow"}


class Event(BaseModel):
    """A named asynchronous signal a service emits or reacts to."""
    name: NonEmptyString
    description: str | None = None

    model_config = {"extra": "allow"}


class Dependencies(BaseModel):
    critical: list[Dependency] | None = None
    non_critical: list[Dependency] | None = Field(default=None, alias="non-critical")

    model_config = {"populate_by_name": True}


class Events(BaseModel):
    producing: list[Event] | None = None
    consuming: list[Event] | None = None


class ServiceInput(BaseModel):
    """Client payload for creating or replacing a service.

    ``metadata`` is deliberately absent: it is server-owned, and unknown
    top-level fields are rejected.
    """
    name: NonEmptyString
    domain: str | None = None
    team: str | None = None
    owner: str | None = None
    repo: str | None = None
    vision: str | None = None
    contracts: list[Contract] | None = None
    dependencies: Dependencies | None = None
    events: Events | None = None

    model_config = {"extra": "forbid", "populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        """Serialize using the catalog's JSON keys, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ServiceMetadata(BaseModel):
    """Server-assigned bookkeeping for a stored service."""
    created_at: str = Field(..., alias="createdAt", pattern=r"^\d{4}-\d{2}-\d{2}$")
    updated_at: str = Field(..., alias="updatedAt", pattern=r"^\d{4}-\d{2}-\d{2}$")
    version: str = Field(..., pattern=r"^v\d+$")

    model_config = {"populate_by_name": True}


class StoredService(ServiceInput):
    """A service record as held by the catalog store."""
    metadata: ServiceMetadata


class ServiceWriteResponse(BaseModel):
    """Envelope returned by create and replace."""
    ok: bool = True
    service: dict[str, Any]


class OkResponse(BaseModel):
    ok: bool = True
