"""Catalog graph Pydantic v2 data models: nodes, edges, analytics, views."""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EdgeKind(str, Enum):
    """Kinds of edges in the catalog graph."""
    DEPENDENCY = "dependency"
    EVENT = "event"


class Staleness(str, Enum):
    """Freshness band derived from days since the last update."""
    FRESH = "fresh"
    AGING = "aging"
    STALE = "stale"


class DataSource(str, Enum):
    """Where the current metadata dataset came from."""
    LOCAL = "local"
    REMOTE = "remote"


class RecordIssue(BaseModel):
    """A malformed piece of input that the indexer skipped."""
    index: int
    service: str | None = None
    reason: str


class GraphNode(BaseModel):
    """A service (or inferred external dependency) in the graph."""
    id: str
    label: str
    type: str = "service"
    domain: str | None = None
    team: str | None = None
    owner: str | None = None
    repo: str | None = None
    vision: str | None = None
    weight: int = 0
    produced_events: list[str] = Field(default_factory=list)
    consumed_events: list[str] = Field(default_factory=list)
    updated_at: str | None = None
    staleness: Staleness | None = None
    rag_color: str | None = None
    missing: bool = False


class GraphEdge(BaseModel):
    """A dependency or event edge between two nodes."""
    id: str
    source: str
    target: str
    kind: EdgeKind
    label: str | None = None
    critical: bool | None = None
    protocol: str | None = None
    event_name: str | None = None


class CatalogGraph(BaseModel):
    """Indexed view of a service catalog."""
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    max_inbound_weight: int = 0
    all_event_names: list[str] = Field(default_factory=list)
    all_service_ids: list[str] = Field(default_factory=list)
    skipped: list[RecordIssue] = Field(default_factory=list)

    def node(self, node_id: str) -> GraphNode | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None


class RankedService(BaseModel):
    id: str
    count: int


class StaleService(BaseModel):
    id: str
    days_ago: int


class OrphanEvent(BaseModel):
    event_name: str
    producers: list[str]


class CatalogAnalytics(BaseModel):
    """All derived top-N views over one indexed graph."""
    top_by_event_consumers: list[RankedService] = Field(default_factory=list)
    top_by_dependency_consumers: list[RankedService] = Field(default_factory=list)
    oldest_updated: list[StaleService] = Field(default_factory=list)
    orphan_published_events: list[OrphanEvent] = Field(default_factory=list)


class GraphFilter(BaseModel):
    """View-layer filter state applied to an indexed graph."""
    event: str | None = None
    service: str | None = None
    show_dependencies: bool = True
    show_events: bool = True


class GraphView(BaseModel):
    """Visible portion of a graph after filtering."""
    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    max_inbound_weight: int = 0
    all_event_names: list[str] = Field(default_factory=list)
    all_service_ids: list[str] = Field(default_factory=list)


class Neighbourhood(BaseModel):
    """Closed neighbourhood of a selected node."""
    node_id: str
    node_ids: list[str] = Field(default_factory=list)
    edge_ids: list[str] = Field(default_factory=list)


class DependencyRef(BaseModel):
    id: str
    critical: bool


class ServiceDetails(BaseModel):
    """Side-panel details for one node."""
    id: str
    node: GraphNode
    service: dict[str, Any] | None = None
    inbound_dependencies: list[DependencyRef] = Field(default_factory=list)
    outbound_dependencies: list[DependencyRef] = Field(default_factory=list)
    produced_events: list[str] = Field(default_factory=list)
    consumed_events: list[str] = Field(default_factory=list)


class SourceStatus(BaseModel):
    """State of the metadata source."""
    data_source: DataSource
    runtime_url: str | None = None
    configured_url: str | None = None
    fetch_error: str | None = None
    service_count: int = 0


class SourceUpdate(BaseModel):
    """Request to point the metadata source at a runtime URL."""
    url: str = Field(..., min_length=1)
