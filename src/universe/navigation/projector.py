"""Graph projection - flattens a (sub-)tree into nodes and edges.

The projection is what the force-directed renderer consumes. It is
recomputed on every change to the tree, the collapse set or the
drill-down root, and is a pure function of those three inputs.

Algorithm:
1. Pick the start node (drill-down root if found, else the global root)
2. Depth-first traversal from the start node:
   a. Skip ids already emitted
   b. Emit the node with its level and a radial seed position
   c. Emit a tree edge from its parent and one edge per relation
   d. Descend only if the node is not collapsed
3. Drop edges whose endpoints were not emitted
"""

import logging
import math
from collections.abc import Set

from universe.config import settings
from universe.models import GraphEdge, GraphNode, Projection, TopicNode
from universe.navigation.locator import find_by_id

logger = logging.getLogger(__name__)


def seed_position(
    parent_x: float,
    parent_y: float,
    index: int,
    sibling_count: int,
    radius: float,
) -> tuple[float, float]:
    """Seed for the index-th of sibling_count children, evenly spread on a circle."""
    angle = index * (2 * math.pi / sibling_count)
    return parent_x + math.cos(angle) * radius, parent_y + math.sin(angle) * radius


def project(
    tree: TopicNode,
    collapsed: Set[str],
    sub_root_id: str | None = None,
    seed_radius: float | None = None,
) -> Projection:
    """
    Project a tree into a flat graph for rendering.

    Args:
        tree: Unified tree
        collapsed: Ids whose descendants are hidden
        sub_root_id: Drill-down root; falls back to the global root when
            missing or not found
        seed_radius: Parent-to-child distance of seed positions

    Returns:
        Projection with nodes in traversal order and no dangling edges
    """
    radius = settings.seed_radius if seed_radius is None else seed_radius

    start = tree
    if sub_root_id is not None:
        found = find_by_id(tree, sub_root_id)
        if found is not None:
            start = found
        else:
            logger.debug(f"View root '{sub_root_id}' not found, using global root")

    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
    emitted: set[str] = set()

    # (node, x, y, level, parent id)
    stack: list[tuple[TopicNode, float, float, int, str | None]] = [
        (start, 0.0, 0.0, 0, None)
    ]
    while stack:
        node, x, y, level, parent_id = stack.pop()

        if node.id in emitted:
            logger.debug(f"Skipping already projected node '{node.id}'")
            continue
        emitted.add(node.id)

        graph_node = GraphNode(
            id=node.id,
            group=node.group,
            x=x,
            y=y,
            level=level,
            child_count=node.child_count,
            collapsed=node.id in collapsed,
            description=node.description,
        )
        nodes.append(graph_node)

        if parent_id is not None:
            edges.append(GraphEdge(source=parent_id, target=node.id, type="tree"))

        # Targets may not be projected (yet); filtered below
        for rel in node.relations:
            edges.append(GraphEdge(
                source=node.id,
                target=rel.target_id,
                type=rel.type or "dashed",
                label=rel.label,
                curvature=rel.curvature,
            ))

        if graph_node.collapsed or not node.children:
            continue

        count = len(node.children)
        # Reversed so children pop in document order
        for index in reversed(range(count)):
            cx, cy = seed_position(x, y, index, count, radius)
            stack.append((node.children[index], cx, cy, level + 1, node.id))

    valid_edges = [e for e in edges if e.source in emitted and e.target in emitted]

    logger.debug(
        f"Projected '{start.id}': {len(nodes)} nodes, {len(valid_edges)} edges "
        f"({len(edges) - len(valid_edges)} dropped)"
    )
    return Projection(root_id=start.id, nodes=nodes, edges=valid_edges)
