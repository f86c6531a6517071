"""Navigation session - state of one explorable graph view.

Owns the unified tree of the current language together with the collapse
set, the drill-down root and the layout state table, and exposes the
interaction entry points (enter, breadcrumb jump, collapse, language
switch). Nothing here is module-global, so several views can coexist.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from universe.config import settings
from universe.exceptions import SessionNotLoadedError, UniverseError
from universe.models import LayoutState, Projection, TopicNode
from universe.navigation.breadcrumbs import breadcrumbs
from universe.navigation.layout import LayoutStateTable, reconcile
from universe.navigation.locator import find_by_id, initial_collapsed, parent_ids
from universe.navigation.projector import project

if TYPE_CHECKING:
    from universe.loading.resolver import DocumentResolver

logger = logging.getLogger(__name__)


def default_entry_url_template() -> str:
    """Entry document URL with a {language} placeholder."""
    if settings.data_base_url:
        base = settings.data_base_url.rstrip("/")
        return f"{base}/{{language}}/{settings.entry_document}"
    return f"/data/{{language}}/{settings.entry_document}"


class NavigationSession:
    """One graph view over a multi-document universe."""

    def __init__(
        self,
        resolver: "DocumentResolver",
        entry_url_template: str | None = None,
        language: str | None = None,
        languages: list[str] | None = None,
        collapse_depth: int | None = None,
        seed_radius: float | None = None,
    ) -> None:
        self.resolver = resolver
        self.entry_url_template = entry_url_template or default_entry_url_template()
        self.language = language or settings.default_language
        self.languages = languages or list(settings.languages)
        self.collapse_depth = collapse_depth
        self.seed_radius = seed_radius

        self.tree: TopicNode | None = None
        self.collapsed: set[str] = set()
        self.view_root_id: str | None = None
        self.layout = LayoutStateTable()

        # Incremented per load; only the latest load may commit
        self._load_token = 0

    @property
    def loaded(self) -> bool:
        return self.tree is not None

    @property
    def title(self) -> str | None:
        """Id of the global root, shown as the view title."""
        return self.tree.id if self.tree else None

    def entry_url(self, language: str) -> str:
        return self.entry_url_template.format(language=language)

    def _require_tree(self) -> TopicNode:
        if self.tree is None:
            raise SessionNotLoadedError()
        return self.tree

    async def load(self, language: str | None = None) -> bool:
        """
        Load (or reload) the universe for a language.

        A load superseded by a later one is discarded when it finishes. A
        failed load leaves the previously loaded tree in place.

        Returns:
            True if the result was committed, False if it went stale

        Raises:
            FetchError, CycleError, DuplicateIdError: Resolution failed
        """
        language = language or self.language
        if language not in self.languages:
            raise ValueError(f"Unsupported language '{language}', expected one of {self.languages}")

        self._load_token += 1
        token = self._load_token

        try:
            tree = await self.resolver.resolve(self.entry_url(language))
        except UniverseError as e:
            if token != self._load_token:
                logger.warning(f"Ignoring failure of superseded load ({language}): {e}")
                return False
            raise

        if token != self._load_token:
            logger.warning(f"Discarding superseded load for language '{language}'")
            return False

        self.tree = tree
        self.language = language
        self.collapsed = initial_collapsed(tree, self.collapse_depth)
        self.view_root_id = None
        self.layout.clear()

        logger.info(f"Loaded universe '{tree.id}' ({language})")
        return True

    async def toggle_language(self) -> bool:
        """Switch to the next configured language and load it."""
        index = self.languages.index(self.language) if self.language in self.languages else -1
        next_language = self.languages[(index + 1) % len(self.languages)]
        return await self.load(next_language)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def graph(self) -> Projection:
        """Project the current view and carry over the layout state."""
        tree = self._require_tree()
        projection = project(tree, self.collapsed, self.view_root_id, self.seed_radius)
        projection.nodes, self.layout = reconcile(projection.nodes, self.layout)
        return projection

    def breadcrumbs(self) -> list[TopicNode]:
        return breadcrumbs(self._require_tree(), self.view_root_id)

    def node_details(self, node_id: str) -> TopicNode | None:
        return find_by_id(self._require_tree(), node_id)

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def can_enter(self, node_id: str) -> bool:
        """A node can be entered if it has children and is not already the view root."""
        node = self.node_details(node_id)
        if node is None or not node.children:
            return False
        current_root = self.view_root_id or self._require_tree().id
        return node.id != current_root

    def enter(self, node_id: str) -> bool:
        """Drill down into a node; returns whether the view changed."""
        if not self.can_enter(node_id):
            return False
        self.view_root_id = node_id
        logger.info(f"Entered '{node_id}'")
        return True

    def navigate(self, node_id: str | None) -> bool:
        """Jump to a breadcrumb; None returns to the global view."""
        tree = self._require_tree()
        if node_id is None or node_id == tree.id:
            self.view_root_id = None
            return True
        if find_by_id(tree, node_id) is None:
            return False
        self.view_root_id = node_id
        return True

    def toggle_collapse(self, node_id: str) -> bool | None:
        """Flip a node's collapsed flag; None if the node does not exist."""
        if self.node_details(node_id) is None:
            return None
        if node_id in self.collapsed:
            self.collapsed.discard(node_id)
            return False
        self.collapsed.add(node_id)
        return True

    def collapse_all(self) -> None:
        self.collapsed = parent_ids(self._require_tree())

    def expand_all(self) -> None:
        self.collapsed = set()

    def record_positions(self, states: Iterable[tuple[str, LayoutState]]) -> int:
        """
        Store positions reported by the renderer's simulation.

        Only nodes of the current projection are kept, so nodes that have
        left the view leave no history behind.

        Returns:
            Number of states recorded
        """
        return self.layout.update_many(
            (node_id, state) for node_id, state in states if node_id in self.layout
        )
