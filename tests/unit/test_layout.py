"""Unit tests for layout state reconciliation."""

from universe.models import GraphEdge, GraphNode, LayoutState, TopicNode
from universe.navigation import LayoutStateTable, project, reconcile


def node(node_id: str, x: float = 0.0, y: float = 0.0) -> GraphNode:
    return GraphNode(id=node_id, group=0, x=x, y=y, level=0, child_count=0)


class TestReconcile:
    """Tests for reconcile."""

    def test_restores_known_and_keeps_seed(self) -> None:
        """Test known node takes stored state, new node keeps its seed."""
        previous = LayoutStateTable({"A": LayoutState(x=10, y=5)})
        nodes = [node("A", 1, 1), node("B", 7, 8)]

        result, table = reconcile(nodes, previous)

        assert (result[0].x, result[0].y) == (10, 5)
        assert (result[1].x, result[1].y) == (7, 8)
        assert set(table) == {"A", "B"}

    def test_restores_velocity(self) -> None:
        """Test velocity is carried over with the position."""
        previous = LayoutStateTable({"A": LayoutState(x=1, y=2, vx=0.5, vy=-0.25)})
        result, _ = reconcile([node("A")], previous)
        assert (result[0].vx, result[0].vy) == (0.5, -0.25)

    def test_drops_removed_nodes(self) -> None:
        """Test table only holds nodes of the current projection."""
        previous = LayoutStateTable({
            "A": LayoutState(x=1, y=1),
            "Gone": LayoutState(x=2, y=2),
        })
        _, table = reconcile([node("A")], previous)
        assert "Gone" not in table
        assert len(table) == 1

    def test_mutates_in_place(self) -> None:
        """Test the same node objects are returned."""
        nodes = [node("A")]
        result, _ = reconcile(nodes, LayoutStateTable({"A": LayoutState(x=3, y=4)}))
        assert result is nodes
        assert nodes[0].x == 3

    def test_new_table_reflects_current_state(self) -> None:
        """Test table entries match the reconciled nodes."""
        _, table = reconcile([node("A", 4, 2)], LayoutStateTable())
        assert table.get("A") == LayoutState(x=4, y=2)

    def test_previous_table_untouched(self) -> None:
        """Test reconciling does not modify the previous table."""
        previous = LayoutStateTable({"Gone": LayoutState(x=1, y=1)})
        reconcile([node("A")], previous)
        assert "Gone" in previous
        assert "A" not in previous

    def test_edges_untouched(self, sample_tree: TopicNode) -> None:
        """Test reconciliation leaves the projection's edges alone."""
        projection = project(sample_tree, set())
        edges_before = [GraphEdge(**vars(e)) for e in projection.edges]
        previous = LayoutStateTable.from_nodes(projection.nodes)

        reconcile(project(sample_tree, set()).nodes, previous)

        assert projection.edges == edges_before

    def test_collapse_keeps_layout(self, sample_tree: TopicNode) -> None:
        """Test nodes keep their simulated spot across a collapse."""
        first = project(sample_tree, set())
        _, table = reconcile(first.nodes, LayoutStateTable())
        table.update_many([("Piano", LayoutState(x=123.0, y=-45.0, vx=1.0, vy=2.0))])

        second = project(sample_tree, {"Guitar"})
        nodes, table = reconcile(second.nodes, table)

        piano = next(n for n in nodes if n.id == "Piano")
        assert (piano.x, piano.y, piano.vx, piano.vy) == (123.0, -45.0, 1.0, 2.0)
        assert "Jazz" not in table


class TestLayoutStateTable:
    """Tests for LayoutStateTable."""

    def test_get(self) -> None:
        """Test lookup of a stored state."""
        table = LayoutStateTable()
        table.update_many([("A", LayoutState(x=1, y=2, vx=3, vy=4))])
        assert table.get("A") == LayoutState(x=1, y=2, vx=3, vy=4)
        assert table.get("B") is None

    def test_update_many(self) -> None:
        """Test batch update counts stored states."""
        table = LayoutStateTable()
        count = table.update_many([("A", LayoutState(x=1, y=1)), ("B", LayoutState(x=2, y=2))])
        assert count == 2
        assert set(table) == {"A", "B"}

    def test_clear(self) -> None:
        """Test full reset."""
        table = LayoutStateTable({"A": LayoutState(x=1, y=1)})
        table.clear()
        assert len(table) == 0

    def test_to_dict(self) -> None:
        """Test plain serialization."""
        table = LayoutStateTable({"A": LayoutState(x=1, y=2)})
        assert table.to_dict() == {"A": {"x": 1, "y": 2, "vx": None, "vy": None}}
