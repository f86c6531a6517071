"""Pure lookups over a resolved topic tree.

All traversals are depth-first in document order and iterative, so very
deep trees do not hit the recursion limit. A miss is reported as None.
"""

from collections import Counter
from collections.abc import Iterator

from universe.models import TopicNode


def iter_nodes(tree: TopicNode) -> Iterator[TopicNode]:
    """Yield every node in depth-first pre-order."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_with_depth(tree: TopicNode) -> Iterator[tuple[TopicNode, int]]:
    """Yield (node, depth) pairs in depth-first pre-order, root at depth 0."""
    stack = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def find_by_id(tree: TopicNode, node_id: str) -> TopicNode | None:
    """Find a node by id; the first match in document order wins."""
    for node in iter_nodes(tree):
        if node.id == node_id:
            return node
    return None


def path_to(tree: TopicNode, node_id: str) -> list[TopicNode] | None:
    """
    Path from the root to a node, both inclusive.

    Returns:
        The first path discovered depth-first, or None if the id is absent
    """
    # Each stack entry carries the path leading to its node
    stack: list[tuple[TopicNode, list[TopicNode]]] = [(tree, [tree])]
    while stack:
        node, path = stack.pop()
        if node.id == node_id:
            return path
        for child in reversed(node.children):
            stack.append((child, [*path, child]))
    return None


def parent_ids(tree: TopicNode) -> set[str]:
    """Ids of every node that has at least one child."""
    return {node.id for node in iter_nodes(tree) if node.children}


def find_duplicate_ids(tree: TopicNode) -> list[str]:
    """Ids occurring more than once, in order of first occurrence."""
    counts = Counter(node.id for node in iter_nodes(tree))
    return [node_id for node_id, count in counts.items() if count > 1]


def initial_collapsed(tree: TopicNode, depth_limit: int | None = None) -> set[str]:
    """
    Default collapse set for a freshly loaded tree.

    Args:
        tree: Unified tree
        depth_limit: Collapse every parent at this depth or deeper;
            None keeps the whole tree expanded

    Returns:
        Ids to collapse
    """
    if depth_limit is None:
        return set()
    return {
        node.id
        for node, depth in iter_with_depth(tree)
        if node.children and depth >= depth_limit
    }
