"""Derived read-only views over an indexed catalog graph.

All functions are pure and recomputed on demand from a
:class:`~src.shared.models.graph.CatalogGraph`.  Rankings break ties by
service id ascending so results are stable across runs.
"""
from __future__ import annotations

import math
from datetime import datetime

from src.shared.constants import DEFAULT_TOP_N, FRESH_MAX_DAYS, STALE_AFTER_DAYS
from src.shared.models.graph import (
    CatalogAnalytics,
    CatalogGraph,
    EdgeKind,
    OrphanEvent,
    RankedService,
    Staleness,
    StaleService,
)
from src.shared.utils import days_since


def staleness_band(updated_at: str | None, now: datetime | None = None) -> Staleness:
    """Classify a last-updated date; unknown dates count as stale."""
    days = days_since(updated_at, now)
    if days <= FRESH_MAX_DAYS:
        return Staleness.FRESH
    if days > STALE_AFTER_DAYS:
        return Staleness.STALE
    return Staleness.AGING


def _rank(counts: dict[str, int], limit: int) -> list[RankedService]:
    ranked = sorted(
        ((node_id, count) for node_id, count in counts.items() if count > 0),
        key=lambda item: (-item[1], item[0]),
    )
    return [RankedService(id=node_id, count=count) for node_id, count in ranked[:limit]]


def top_by_event_consumers(
    graph: CatalogGraph, limit: int = DEFAULT_TOP_N
) -> list[RankedService]:
    """Services whose produced events reach the most other consumers.

    For each service, sums over its produced events the number of distinct
    services (other than itself) consuming that event.
    """
    consumers_by_event: dict[str, set[str]] = {}
    for node in graph.nodes:
        for event_name in node.consumed_events:
            consumers_by_event.setdefault(event_name, set()).add(node.id)

    counts: dict[str, int] = {}
    for node in graph.nodes:
        total = 0
        for event_name in set(node.produced_events):
            consumers = consumers_by_event.get(event_name, set())
            total += len(consumers - {node.id})
        counts[node.id] = total
    return _rank(counts, limit)


def top_by_dependency_consumers(
    graph: CatalogGraph, limit: int = DEFAULT_TOP_N
) -> list[RankedService]:
    """Most depended-upon services by inbound dependency edge count."""
    counts = {node.id: 0 for node in graph.nodes}
    for edge in graph.edges:
        if edge.kind == EdgeKind.DEPENDENCY:
            counts[edge.target] = counts.get(edge.target, 0) + 1
    return _rank(counts, limit)


def oldest_updated(
    graph: CatalogGraph,
    limit: int = DEFAULT_TOP_N,
    now: datetime | None = None,
) -> list[StaleService]:
    """Services ranked by days since their last update, oldest first.

    Nodes with a missing or unparseable ``updated_at`` are excluded.
    """
    ages = [(node.id, days_since(node.updated_at, now)) for node in graph.nodes]
    finite = [(node_id, days) for node_id, days in ages if math.isfinite(days)]
    finite.sort(key=lambda item: (-item[1], item[0]))
    return [StaleService(id=node_id, days_ago=int(days)) for node_id, days in finite[:limit]]


def orphan_published_events(graph: CatalogGraph) -> list[OrphanEvent]:
    """Events with at least one producer and no consumer anywhere."""
    producers_by_event: dict[str, set[str]] = {}
    consumed: set[str] = set()
    for node in graph.nodes:
        for event_name in node.produced_events:
            producers_by_event.setdefault(event_name, set()).add(node.id)
        consumed.update(node.consumed_events)

    return [
        OrphanEvent(event_name=event_name, producers=sorted(producers))
        for event_name, producers in sorted(producers_by_event.items())
        if event_name not in consumed
    ]


def summarize(
    graph: CatalogGraph,
    limit: int = DEFAULT_TOP_N,
    now: datetime | None = None,
) -> CatalogAnalytics:
    """Compute every derived view for *graph*."""
    return CatalogAnalytics(
        top_by_event_consumers=top_by_event_consumers(graph, limit),
        top_by_dependency_consumers=top_by_dependency_consumers(graph, limit),
        oldest_updated=oldest_updated(graph, limit, now),
        orphan_published_events=orphan_published_events(graph),
    )
