"""Graph endpoints: filtered views, layout elements, analytics, details.

``source=metadata`` (default) graphs the bundled or remote metadata
dataset; ``source=catalog`` graphs the services held by the CRUD store.
"""
from __future__ import annotations

from typing import Any, Literal

from fastapi import APIRouter, Query, Request

from src.catalog_graph.analytics import summarize
from src.catalog_graph.indexer import build_graph
from src.catalog_graph.layout import force_layout
from src.catalog_graph.metadata_source import MetadataSource
from src.catalog_graph.presentation import to_elements
from src.catalog_graph.view import filter_graph, neighbourhood, service_details
from src.shared.models.graph import (
    CatalogAnalytics,
    GraphFilter,
    GraphView,
    Neighbourhood,
    ServiceDetails,
    SourceStatus,
    SourceUpdate,
)

router = APIRouter(prefix="/graph", tags=["graph"])

GraphSource = Literal["metadata", "catalog"]


def _metadata_source(request: Request) -> MetadataSource:
    return request.app.state.metadata_source


def _services(request: Request, source: GraphSource) -> list[Any]:
    if source == "catalog":
        return list(request.app.state.store.list())
    return _metadata_source(request).services


def _filter(
    event: str | None,
    service: str | None,
    show_dependencies: bool,
    show_events: bool,
) -> GraphFilter:
    return GraphFilter(
        event=event or None,
        service=service or None,
        show_dependencies=show_dependencies,
        show_events=show_events,
    )


@router.get("", response_model=GraphView)
async def get_graph(
    request: Request,
    source: GraphSource = Query("metadata"),
    event: str | None = Query(None),
    service: str | None = Query(None),
    show_dependencies: bool = Query(True),
    show_events: bool = Query(True),
) -> GraphView:
    """Indexed graph narrowed by the optional event/service filters."""
    graph = build_graph(_services(request, source))
    return filter_graph(graph, _filter(event, service, show_dependencies, show_events))


@router.get("/elements")
async def get_elements(
    request: Request,
    source: GraphSource = Query("metadata"),
    event: str | None = Query(None),
    service: str | None = Query(None),
    show_dependencies: bool = Query(True),
    show_events: bool = Query(True),
) -> dict[str, Any]:
    """Cytoscape-style elements with force-directed positions.

    Positions are computed over the full graph so filtering does not move
    the remaining nodes.
    """
    graph = build_graph(_services(request, source))
    positions = force_layout(graph)
    view = filter_graph(graph, _filter(event, service, show_dependencies, show_events))
    return {
        "elements": to_elements(view, positions),
        "max_inbound_weight": view.max_inbound_weight,
    }


@router.get("/analytics", response_model=CatalogAnalytics)
async def get_analytics(
    request: Request,
    source: GraphSource = Query("metadata"),
    limit: int | None = Query(None, ge=1),
) -> CatalogAnalytics:
    """Top-N rankings and orphaned events."""
    graph = build_graph(_services(request, source))
    return summarize(graph, limit or request.app.state.config.top_n)


@router.get("/neighbourhood/{name}", response_model=Neighbourhood)
async def get_neighbourhood(
    name: str,
    request: Request,
    source: GraphSource = Query("metadata"),
) -> Neighbourhood:
    """Node and edge ids to highlight when *name* is selected."""
    return neighbourhood(build_graph(_services(request, source)), name)


@router.get("/services/{name}", response_model=ServiceDetails)
async def get_service_details(
    name: str,
    request: Request,
    source: GraphSource = Query("metadata"),
) -> ServiceDetails:
    """Inbound/outbound dependencies and events for one node."""
    services = _services(request, source)
    return service_details(build_graph(services), name, services)


@router.get("/source", response_model=SourceStatus)
async def get_source(request: Request) -> SourceStatus:
    return _metadata_source(request).status()


@router.post("/source", response_model=SourceStatus)
async def set_source(body: SourceUpdate, request: Request) -> SourceStatus:
    """Set the runtime metadata URL and fetch from it.

    A failed fetch is reported in ``fetch_error``; the previous dataset
    stays in place.
    """
    source = _metadata_source(request)
    await source.apply_runtime_url(body.url)
    return source.status()


@router.delete("/source", response_model=SourceStatus)
async def clear_source(request: Request) -> SourceStatus:
    """Clear the runtime URL and refetch from configuration, if set."""
    source = _metadata_source(request)
    await source.clear_runtime_url()
    return source.status()


@router.post("/source/refresh", response_model=SourceStatus)
async def refresh_source(request: Request) -> SourceStatus:
    source = _metadata_source(request)
    await source.refresh()
    return source.status()
