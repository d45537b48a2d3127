"""Pure view logic: filtering, selection neighbourhood, and node details."""
from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel

from src.shared.errors import NotFoundError
from src.shared.models.graph import (
    CatalogGraph,
    DependencyRef,
    EdgeKind,
    GraphFilter,
    GraphView,
    Neighbourhood,
    ServiceDetails,
)


def filter_graph(graph: CatalogGraph, state: GraphFilter | None = None) -> GraphView:
    """Return the nodes and edges visible under *state*.

    * ``event``: keep services producing or consuming it, and among event
      edges only those carrying it.
    * ``service``: keep the service and its direct neighbours over any edge.
    * ``show_dependencies`` / ``show_events``: hide an edge kind.

    Edges are only kept when both endpoints are visible.
    """
    state = state or GraphFilter()
    allowed = {node.id for node in graph.nodes}

    if state.event is not None:
        allowed &= {
            node.id
            for node in graph.nodes
            if state.event in node.produced_events or state.event in node.consumed_events
        }

    if state.service is not None:
        context = {state.service}
        for edge in graph.edges:
            if edge.source == state.service:
                context.add(edge.target)
            if edge.target == state.service:
                context.add(edge.source)
        allowed &= context

    nodes = [node for node in graph.nodes if node.id in allowed]
    edges = []
    for edge in graph.edges:
        if edge.source not in allowed or edge.target not in allowed:
            continue
        if edge.kind == EdgeKind.DEPENDENCY and not state.show_dependencies:
            continue
        if edge.kind == EdgeKind.EVENT:
            if not state.show_events:
                continue
            if state.event is not None and edge.event_name != state.event:
                continue
        edges.append(edge)

    return GraphView(
        nodes=nodes,
        edges=edges,
        max_inbound_weight=graph.max_inbound_weight,
        all_event_names=graph.all_event_names,
        all_service_ids=graph.all_service_ids,
    )


def neighbourhood(graph: CatalogGraph, node_id: str) -> Neighbourhood:
    """Closed neighbourhood of *node_id*: itself, adjacent nodes, incident edges."""
    if graph.node(node_id) is None:
        return Neighbourhood(node_id=node_id)

    node_ids = {node_id}
    edge_ids: list[str] = []
    for edge in graph.edges:
        if node_id in (edge.source, edge.target):
            node_ids.update((edge.source, edge.target))
            edge_ids.append(edge.id)
    return Neighbourhood(node_id=node_id, node_ids=sorted(node_ids), edge_ids=edge_ids)


def _raw_service(services: Iterable[Any], node_id: str) -> dict[str, Any] | None:
    for svc in services:
        if isinstance(svc, BaseModel):
            svc = svc.model_dump(by_alias=True, exclude_none=True)
        if isinstance(svc, dict):
            name = svc.get("name")
            if name is None and isinstance(svc.get("service"), dict):
                name = svc["service"].get("name")
            if name == node_id:
                return svc
    return None


def service_details(
    graph: CatalogGraph,
    node_id: str,
    services: Iterable[Any] = (),
) -> ServiceDetails:
    """Build the side-panel details for *node_id*.

    Raises:
        NotFoundError: *node_id* is not a node of the graph.
    """
    node = graph.node(node_id)
    if node is None:
        raise NotFoundError(detail=f"Service '{node_id}' not found in graph")

    inbound: list[DependencyRef] = []
    outbound: list[DependencyRef] = []
    for edge in graph.edges:
        if edge.kind != EdgeKind.DEPENDENCY:
            continue
        if edge.target == node_id:
            inbound.append(DependencyRef(id=edge.source, critical=bool(edge.critical)))
        if edge.source == node_id:
            outbound.append(DependencyRef(id=edge.target, critical=bool(edge.critical)))

    return ServiceDetails(
        id=node_id,
        node=node,
        service=_raw_service(services, node_id),
        inbound_dependencies=sorted(inbound, key=lambda ref: ref.id),
        outbound_dependencies=sorted(outbound, key=lambda ref: ref.id),
        produced_events=sorted(set(node.produced_events)),
        consumed_events=sorted(set(node.consumed_events)),
    )
