"""Graph view endpoints for the force-directed renderer."""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from universe.api.routes import get_session
from universe.exceptions import SessionNotLoadedError
from universe.models import LayoutState
from universe.navigation.session import NavigationSession

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/graph")


# ============================================================================
# Models
# ============================================================================


class CrumbInfo(BaseModel):
    """One breadcrumb entry."""

    id: str
    group: int


class BreadcrumbsResponse(BaseModel):
    """Title plus the trail from the global root to the view root."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    view_root_id: str | None = Field(default=None, alias="viewRootId")
    trail: list[CrumbInfo]


class NodeDetailsResponse(BaseModel):
    """Sidebar details for a node."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    group: int
    description: str | None = None
    child_count: int = Field(alias="childCount")
    collapsed: bool
    can_enter: bool = Field(alias="canEnter")


class ViewRequest(BaseModel):
    """Drill-down or breadcrumb jump; a null root returns to the global view."""

    model_config = ConfigDict(populate_by_name=True)

    root_id: str | None = Field(default=None, alias="rootId")


class CollapseResponse(BaseModel):
    """New collapsed state of a node."""

    id: str
    collapsed: bool


class NodePosition(BaseModel):
    """Simulated state of one node as reported by the renderer."""

    id: str
    x: float
    y: float
    vx: float | None = None
    vy: float | None = None


class PositionsRequest(BaseModel):
    """Batch of simulated node states."""

    positions: list[NodePosition]


class PositionsResponse(BaseModel):
    """How many reported states were kept."""

    recorded: int


# ============================================================================
# Helpers
# ============================================================================


def get_loaded_session(request: Request) -> NavigationSession:
    """Get the session, failing with 503 until a universe is loaded."""
    session = get_session(request)
    if not session.loaded:
        raise HTTPException(status_code=503, detail=str(SessionNotLoadedError()))
    return session


# ============================================================================
# Endpoints
# ============================================================================


@router.get("")
async def get_graph(request: Request) -> dict:
    """Get the current projection with layout state carried over.

    Returns {rootId, nodes, links}; links only reference projected nodes.
    """
    session = get_loaded_session(request)
    projection = session.graph()
    logger.debug(f"Serving graph '{projection.root_id}' with {len(projection.nodes)} nodes")
    return projection.to_dict()


@router.get(
    "/breadcrumbs",
    response_model=BreadcrumbsResponse,
    response_model_by_alias=True,
)
async def get_breadcrumbs(request: Request) -> BreadcrumbsResponse:
    """Get the breadcrumb trail of the current view."""
    session = get_loaded_session(request)
    return BreadcrumbsResponse(
        title=session.title,
        view_root_id=session.view_root_id,
        trail=[CrumbInfo(id=node.id, group=node.group) for node in session.breadcrumbs()],
    )


@router.get(
    "/nodes/{node_id}",
    response_model=NodeDetailsResponse,
    response_model_by_alias=True,
)
async def get_node(request: Request, node_id: str) -> NodeDetailsResponse:
    """Get sidebar details for a node."""
    session = get_loaded_session(request)
    node = session.node_details(node_id)
    if node is None:
        raise HTTPException(status_code=404, detail=f"Node '{node_id}' not found")

    return NodeDetailsResponse(
        id=node.id,
        group=node.group,
        description=node.description,
        child_count=node.child_count,
        collapsed=node.id in session.collapsed,
        can_enter=session.can_enter(node.id),
    )


@router.post("/view")
async def set_view(request: Request, body: ViewRequest) -> dict:
    """Drill into a node or jump back along the breadcrumbs."""
    session = get_loaded_session(request)
    if not session.navigate(body.root_id):
        raise HTTPException(status_code=404, detail=f"Node '{body.root_id}' not found")
    return {"viewRootId": session.view_root_id}


@router.post("/collapse/{node_id}", response_model=CollapseResponse)
async def toggle_collapse(request: Request, node_id: str) -> CollapseResponse:
    """Toggle whether a node's descendants are shown."""
    session = get_loaded_session(request)
    collapsed = session.toggle_collapse(node_id)
    if collapsed is None:
        raise HTTPException(status_code=404, detail=f"Node '{node_id}' not found")
    return CollapseResponse(id=node_id, collapsed=collapsed)


@router.post("/collapse")
async def collapse_all(request: Request) -> dict:
    """Collapse every node that has children."""
    session = get_loaded_session(request)
    session.collapse_all()
    return {"collapsed": sorted(session.collapsed)}


@router.post("/expand")
async def expand_all(request: Request) -> dict:
    """Expand the whole tree."""
    session = get_loaded_session(request)
    session.expand_all()
    return {"collapsed": []}


@router.post("/positions", response_model=PositionsResponse)
async def record_positions(request: Request, body: PositionsRequest) -> PositionsResponse:
    """Store simulated positions so the next projection keeps them."""
    session = get_loaded_session(request)
    recorded = session.record_positions(
        (p.id, LayoutState(x=p.x, y=p.y, vx=p.vx, vy=p.vy)) for p in body.positions
    )
    return PositionsResponse(recorded=recorded)
