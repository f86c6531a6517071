"""Render projection models - the flat node/edge view handed to the renderer."""

from dataclasses import dataclass, field
from typing import Any, Literal

EdgeType = Literal["tree", "solid", "dashed"]


@dataclass
class GraphNode:
    """A node of the current projection, identified across projections by id."""

    id: str
    group: int
    x: float
    y: float
    level: int  # Distance from the projection root (root = 0)
    child_count: int  # Authored child count, irrespective of collapse
    collapsed: bool = False
    description: str | None = None

    # Velocity is only known once the simulation has run
    vx: float | None = None
    vy: float | None = None

    def to_dict(self) -> dict:
        """Convert to the renderer's node format."""
        data: dict[str, Any] = {
            "id": self.id,
            "group": self.group,
            "description": self.description,
            "x": self.x,
            "y": self.y,
            "level": self.level,
            "childCount": self.child_count,
            "collapsed": self.collapsed,
        }
        if self.vx is not None:
            data["vx"] = self.vx
        if self.vy is not None:
            data["vy"] = self.vy
        return data


@dataclass
class GraphEdge:
    """A tree edge or an authored relation between two projected nodes."""

    source: str
    target: str
    type: EdgeType = "tree"
    label: str | None = None
    curvature: float | None = None

    def to_dict(self) -> dict:
        """Convert to the renderer's link format."""
        data: dict[str, Any] = {
            "source": self.source,
            "target": self.target,
            "type": self.type,
        }
        if self.label is not None:
            data["label"] = self.label
        if self.curvature is not None:
            data["curvature"] = self.curvature
        return data


@dataclass
class Projection:
    """Result of projecting a (sub-)tree into a graph."""

    root_id: str
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def get_node(self, node_id: str) -> GraphNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> dict:
        """Convert to the renderer's graph data format."""
        return {
            "rootId": self.root_id,
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [edge.to_dict() for edge in self.edges],
        }


@dataclass
class LayoutState:
    """Last known simulated position and velocity of one node."""

    x: float
    y: float
    vx: float | None = None
    vy: float | None = None

    @classmethod
    def from_node(cls, node: GraphNode) -> "LayoutState":
        return cls(x=node.x, y=node.y, vx=node.vx, vy=node.vy)
