"""Catalog indexer: builds the dependency/event graph from service records.

Single pass over the service array:

1. ensure a node per service (a repeated name merges into the same node);
2. add a dependency edge per declared dependency, critical entries first,
   inferring an external node for targets that are not primary records;
3. collect producers and consumers per event name;
4. emit producer -> consumer event edges for every shared event name,
   excluding self-loops;
5. derive each node's inbound dependency weight from the final edge set.

Event names are matched exactly (case-sensitive).
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable

from src.catalog_graph.analytics import staleness_band
from src.catalog_graph.presentation import rag_color
from src.catalog_graph.records import ServiceRecord, parse_service_records
from src.catalog_graph.service_graph import ServiceGraph
from src.shared.constants import CRITICAL, NON_CRITICAL
from src.shared.models.graph import CatalogGraph, EdgeKind

logger = logging.getLogger(__name__)


def dependency_edge_id(source: str, target: str, critical: bool) -> str:
    suffix = "critical" if critical else "noncritical"
    return f"dep-{source}-{target}-{suffix}"


def event_edge_id(event_name: str, producer: str, consumer: str) -> str:
    return f"evt-{event_name}-{producer}-{consumer}"


def _append_unique(values: list[str], value: str) -> None:
    if value not in values:
        values.append(value)


class CatalogIndexer:
    """Builds a :class:`CatalogGraph` from raw service metadata.

    Every call to :meth:`index` rebuilds from scratch; nothing is carried
    over between passes.
    """

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now
        self._kg = ServiceGraph()

    @property
    def service_graph(self) -> ServiceGraph:
        """The networkx-backed graph from the most recent pass."""
        return self._kg

    def index(self, services: Iterable[Any]) -> CatalogGraph:
        records, issues = parse_service_records(services)
        self._kg = ServiceGraph()
        primary = {r.name for r in records}

        producers: dict[str, dict[str, None]] = {}
        consumers: dict[str, dict[str, None]] = {}

        for record in records:
            self._add_service_node(record)

            for dep in record.dependencies:
                if dep.name not in self._kg:
                    self._add_inferred_node(dep.name, dep.role, missing=dep.name not in primary)
                self._kg.add_edge(
                    record.name,
                    dep.name,
                    key=dependency_edge_id(record.name, dep.name, dep.critical),
                    kind=EdgeKind.DEPENDENCY,
                    label=dep.role or (CRITICAL if dep.critical else NON_CRITICAL),
                    critical=dep.critical,
                    protocol=dep.protocol,
                )

            node = self._kg.get_node(record.name)
            for event_name in record.producing:
                _append_unique(node["produced_events"], event_name)
                producers.setdefault(event_name, {})[record.name] = None
            for event_name in record.consuming:
                _append_unique(node["consumed_events"], event_name)
                consumers.setdefault(event_name, {})[record.name] = None

        all_event_names = list(dict.fromkeys([*producers, *consumers]))
        for event_name in all_event_names:
            for producer in producers.get(event_name, {}):
                for consumer in consumers.get(event_name, {}):
                    if producer == consumer:
                        continue
                    self._kg.add_edge(
                        producer,
                        consumer,
                        key=event_edge_id(event_name, producer, consumer),
                        kind=EdgeKind.EVENT,
                        label=event_name,
                        event_name=event_name,
                    )

        max_weight = 0
        for node_id in list(self._kg.graph.nodes):
            weight = self._kg.inbound_dependency_count(node_id)
            self._kg.get_node(node_id)["weight"] = weight
            max_weight = max(max_weight, weight)

        graph = CatalogGraph(
            nodes=self._kg.nodes(),
            edges=self._kg.edges(),
            max_inbound_weight=max_weight,
            all_event_names=sorted(all_event_names),
            all_service_ids=sorted(self._kg.graph.nodes),
            skipped=issues,
        )
        logger.info(
            "Indexed catalog: services=%d nodes=%d edges=%d events=%d skipped=%d",
            len(records), len(graph.nodes), len(graph.edges),
            len(graph.all_event_names), len(issues),
        )
        return graph

    def _add_service_node(self, record: ServiceRecord) -> None:
        existing = self._kg.get_node(record.name)
        band = staleness_band(record.updated_at, self._now)
        attrs: dict[str, Any] = {
            "label": record.name,
            "type": record.contract_role or "service",
            "domain": record.domain,
            "team": record.team,
            "owner": record.owner,
            "repo": record.repo,
            "vision": record.vision,
            "updated_at": record.updated_at,
            "staleness": band,
            "rag_color": rag_color(band),
            "missing": False,
        }
        if existing is None:
            attrs.update(weight=0, produced_events=[], consumed_events=[])
        self._kg.add_node(record.name, **attrs)

    def _add_inferred_node(self, name: str, role: str | None, missing: bool) -> None:
        self._kg.add_node(
            name,
            label=name,
            type=role or "external",
            domain="external",
            team="external",
            weight=0,
            produced_events=[],
            consumed_events=[],
            missing=missing,
        )


def build_graph(services: Iterable[Any], now: datetime | None = None) -> CatalogGraph:
    """Index *services* and return the resulting graph."""
    return CatalogIndexer(now=now).index(services)
