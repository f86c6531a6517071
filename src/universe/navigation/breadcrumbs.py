"""Breadcrumb trail for the drill-down view."""

from universe.models import TopicNode
from universe.navigation.locator import path_to


def breadcrumbs(tree: TopicNode, sub_root_id: str | None) -> list[TopicNode]:
    """Path from the global root to sub_root_id, without the global root itself.

    The root is always shown as the view title, so it is not repeated.
    Empty for the global view or an unknown id.
    """
    if sub_root_id is None:
        return []
    path = path_to(tree, sub_root_id)
    if not path:
        return []
    return [node for node in path if node.id != tree.id]
