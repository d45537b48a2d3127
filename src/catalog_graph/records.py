"""Lenient parsing of raw service metadata into typed records.

The indexer is a best-effort aggregation, not a validating pipeline.  This
module makes its leniency explicit:

* a record that is not an object, or has no usable ``name``, is skipped;
* a dependency or event entry without a ``name`` is dropped;
* list-valued fields of the wrong type are treated as empty.

Every skip is reported as a :class:`RecordIssue` so callers can surface it,
but nothing here raises on malformed input.

Two record shapes are accepted: the flat catalog shape
(``{"name", "dependencies", "events", "metadata": {"updatedAt"}}``) and the
envelope shape ``{"service": {"name", "updated", "metadata": {...}}}``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import BaseModel

from src.shared.models.graph import RecordIssue

logger = logging.getLogger(__name__)

_OWNERSHIP_FIELDS = ("domain", "team", "owner", "repo", "vision")


@dataclass
class DeclaredDependency:
    name: str
    critical: bool
    role: str | None = None
    protocol: str | None = None


@dataclass
class ServiceRecord:
    """A service record after lenient parsing."""
    name: str
    contract_role: str | None = None
    domain: str | None = None
    team: str | None = None
    owner: str | None = None
    repo: str | None = None
    vision: str | None = None
    dependencies: list[DeclaredDependency] = field(default_factory=list)
    producing: list[str] = field(default_factory=list)
    consuming: list[str] = field(default_factory=list)
    updated_at: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


def _usable_name(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _unwrap(raw: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any], str | None]:
    """Return ``(identity, body, updated_at)`` for either record shape."""
    envelope = raw.get("service")
    if "name" not in raw and isinstance(envelope, dict):
        body = _as_dict(envelope.get("metadata"))
        updated = _optional_str(envelope.get("updated")) or _optional_str(
            body.get("updatedAt")
        )
        return envelope, body, updated
    updated = _optional_str(_as_dict(raw.get("metadata")).get("updatedAt"))
    return raw, raw, updated


def parse_service_record(
    raw: Any, index: int = 0
) -> tuple[ServiceRecord | None, list[RecordIssue]]:
    """Parse one raw record.

    Returns the record (or ``None`` when it must be skipped) together with
    the issues found while parsing it.
    """
    issues: list[RecordIssue] = []

    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True, exclude_none=True)
    if not isinstance(raw, dict):
        issues.append(RecordIssue(index=index, reason="record is not an object"))
        return None, issues

    identity, body, updated_at = _unwrap(raw)
    name = _usable_name(identity.get("name"))
    if name is None:
        issues.append(RecordIssue(index=index, reason="record has no name"))
        return None, issues

    record = ServiceRecord(name=name, updated_at=updated_at, raw=raw)

    for attr in _OWNERSHIP_FIELDS:
        value = _optional_str(body.get(attr))
        if value is None and body is not identity:
            value = _optional_str(identity.get(attr))
        setattr(record, attr, value)

    contracts = _as_list(body.get("contracts"))
    if contracts and isinstance(contracts[0], dict):
        record.contract_role = _optional_str(contracts[0].get("role")) or None

    deps = _as_dict(body.get("dependencies"))
    for key, critical in (("critical", True), ("non-critical", False)):
        for dep in _as_list(deps.get(key)):
            dep_body = _as_dict(dep)
            dep_name = _usable_name(dep_body.get("name"))
            if dep_name is None:
                issues.append(RecordIssue(
                    index=index, service=name,
                    reason=f"{key} dependency has no name",
                ))
                continue
            record.dependencies.append(DeclaredDependency(
                name=dep_name,
                critical=critical,
                role=_optional_str(dep_body.get("role")),
                protocol=_optional_str(dep_body.get("protocol")),
            ))

    events = _as_dict(body.get("events"))
    for key, target in (("producing", record.producing), ("consuming", record.consuming)):
        for ev in _as_list(events.get(key)):
            ev_name = _usable_name(_as_dict(ev).get("name"))
            if ev_name is None:
                issues.append(RecordIssue(
                    index=index, service=name,
                    reason=f"{key} event has no name",
                ))
                continue
            target.append(ev_name)

    return record, issues


def parse_service_records(
    services: Iterable[Any],
) -> tuple[list[ServiceRecord], list[RecordIssue]]:
    """Parse a whole metadata array, collecting every skip."""
    records: list[ServiceRecord] = []
    issues: list[RecordIssue] = []
    for index, raw in enumerate(services):
        record, found = parse_service_record(raw, index)
        issues.extend(found)
        if record is not None:
            records.append(record)

    if issues:
        logger.warning(
            "Skipped %d malformed entries while parsing %d service records",
            len(issues), len(records),
        )
    return records, issues
