"""Catalog store -- in-memory CRUD over service records keyed by name."""
from __future__ import annotations

import logging
import re
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from src.shared.errors import (
    ConflictError,
    MetadataProvidedError,
    NameMismatchError,
    NotFoundError,
    ValidationError,
)
from src.shared.models.catalog import ServiceInput, ServiceMetadata, StoredService
from src.shared.utils import today_iso

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^v(\d+)$")


def bump_version(previous: str | None) -> str:
    """Return the next ``vN`` version; anything unparsable restarts at ``v1``."""
    if not previous:
        return "v1"
    match = _VERSION_RE.match(previous)
    if match is None:
        return "v1"
    return f"v{int(match.group(1)) + 1}"


def parse_service_input(payload: Any) -> ServiceInput:
    """Validate a client payload.

    A payload carrying ``metadata`` is rejected before anything else is
    checked, whatever the rest of it looks like.

    Raises:
        MetadataProvidedError: ``metadata`` key present.
        ValidationError: schema violation, with the issue list attached.
    """
    if isinstance(payload, dict) and "metadata" in payload:
        raise MetadataProvidedError()
    try:
        return ServiceInput.model_validate(payload)
    except PydanticValidationError as exc:
        issues = exc.errors(include_url=False, include_context=False, include_input=False)
        raise ValidationError(
            detail="Validation failed",
            issues=[
                {"loc": list(issue["loc"]), "msg": issue["msg"], "type": issue["type"]}
                for issue in issues
            ],
        ) from exc


class CatalogStore:
    """Holds stored services in insertion order.

    The store is an explicit object owned by the application; tests get a
    fresh one or call :meth:`reset`.
    """

    def __init__(self, today: Callable[[], str] = today_iso) -> None:
        self._today = today
        self._services: dict[str, StoredService] = {}

    def create(self, service: ServiceInput) -> StoredService:
        """Store a new service with fresh ``v1`` metadata.

        Raises :class:`ConflictError` when the name is already taken.
        """
        if service.name in self._services:
            raise ConflictError(detail=f"Service '{service.name}' already exists")

        now = self._today()
        stored = StoredService(
            **service.model_dump(by_alias=True, exclude_none=True),
            metadata=ServiceMetadata(created_at=now, updated_at=now, version="v1"),
        )
        self._services[service.name] = stored
        logger.info("Service created: name=%s", service.name)
        return stored

    def replace(self, name: str, service: ServiceInput) -> StoredService:
        """Fully replace *name* with *service*, keeping ``createdAt``.

        Raises:
            NameMismatchError: ``service.name`` differs from *name*.
            NotFoundError: *name* is not stored.
        """
        if service.name != name:
            raise NameMismatchError()
        existing = self._services.get(name)
        if existing is None:
            raise NotFoundError(detail=f"Service '{name}' not found")

        stored = StoredService(
            **service.model_dump(by_alias=True, exclude_none=True),
            metadata=ServiceMetadata(
                created_at=existing.metadata.created_at,
                updated_at=self._today(),
                version=bump_version(existing.metadata.version),
            ),
        )
        self._services[name] = stored
        logger.info(
            "Service replaced: name=%s version=%s", name, stored.metadata.version
        )
        return stored

    def get(self, name: str) -> StoredService:
        """Return the stored service; raises :class:`NotFoundError` if absent."""
        stored = self._services.get(name)
        if stored is None:
            raise NotFoundError(detail=f"Service '{name}' not found")
        return stored

    def list(self) -> list[StoredService]:
        return list(self._services.values())

    def delete(self, name: str) -> None:
        """Remove *name*; raises :class:`NotFoundError` if absent."""
        if self._services.pop(name, None) is None:
            raise NotFoundError(detail=f"Service '{name}' not found")
        logger.info("Service deleted: name=%s", name)

    def reset(self) -> None:
        """Drop every stored service (test harness hook)."""
        self._services.clear()

    def __len__(self) -> int:
        return len(self._services)
