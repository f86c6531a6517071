"""Layout state reconciliation across projections.

Every projection creates fresh GraphNode objects with seed positions.
Nodes that were already on screen must keep their simulated position and
velocity, otherwise the layout jumps on every collapse or drill-down. The
LayoutStateTable keeps that state keyed by node id.
"""

import logging
from collections.abc import Iterable, Iterator

from universe.models import GraphNode, LayoutState

logger = logging.getLogger(__name__)


class LayoutStateTable:
    """Mapping of node id to last known position/velocity."""

    def __init__(self, states: dict[str, LayoutState] | None = None) -> None:
        self._states: dict[str, LayoutState] = dict(states or {})

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[str]:
        return iter(self._states)

    def get(self, node_id: str) -> LayoutState | None:
        return self._states.get(node_id)

    def update_many(self, states: Iterable[tuple[str, LayoutState]]) -> int:
        """Record several states at once; returns how many were stored."""
        count = 0
        for node_id, state in states:
            self._states[node_id] = state
            count += 1
        return count

    def clear(self) -> None:
        self._states.clear()

    def to_dict(self) -> dict[str, dict]:
        return {
            node_id: {"x": s.x, "y": s.y, "vx": s.vx, "vy": s.vy}
            for node_id, s in self._states.items()
        }

    @classmethod
    def from_nodes(cls, nodes: Iterable[GraphNode]) -> "LayoutStateTable":
        return cls({node.id: LayoutState.from_node(node) for node in nodes})


def reconcile(
    nodes: list[GraphNode],
    previous: LayoutStateTable,
) -> tuple[list[GraphNode], LayoutStateTable]:
    """
    Carry simulated state over into freshly projected nodes.

    Nodes known to the previous table get its position and velocity; new
    nodes keep their seed. Nodes are updated in place.

    Returns:
        The same node list and a table holding exactly the current nodes
    """
    restored = 0
    for node in nodes:
        state = previous.get(node.id)
        if state is None:
            continue
        node.x = state.x
        node.y = state.y
        node.vx = state.vx
        node.vy = state.vy
        restored += 1

    logger.debug(f"Reconciled layout: {restored} restored, {len(nodes) - restored} seeded")
    return nodes, LayoutStateTable.from_nodes(nodes)
