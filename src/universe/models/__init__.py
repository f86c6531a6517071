"""Universe data models."""

from universe.models.graph import EdgeType, GraphEdge, GraphNode, LayoutState, Projection
from universe.models.topic import RELATION_TYPES, Relation, RelationType, TopicNode

__all__ = [
    "TopicNode",
    "Relation",
    "RelationType",
    "RELATION_TYPES",
    "GraphNode",
    "GraphEdge",
    "EdgeType",
    "Projection",
    "LayoutState",
]
