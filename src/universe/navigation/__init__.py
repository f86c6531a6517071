"""Tree navigation: lookups, projection, breadcrumbs and layout state."""

from universe.navigation.breadcrumbs import breadcrumbs
from universe.navigation.layout import LayoutStateTable, reconcile
from universe.navigation.locator import (
    find_by_id,
    find_duplicate_ids,
    initial_collapsed,
    iter_nodes,
    parent_ids,
    path_to,
)
from universe.navigation.projector import project, seed_position

__all__ = [
    "find_by_id",
    "path_to",
    "iter_nodes",
    "parent_ids",
    "find_duplicate_ids",
    "initial_collapsed",
    "project",
    "seed_position",
    "breadcrumbs",
    "reconcile",
    "LayoutStateTable",
]
