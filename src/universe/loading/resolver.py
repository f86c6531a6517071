"""Document resolver - splices referenced documents into one unified tree.

A child whose id ends with the reference suffix (".json" by default) is a
placeholder for another document. Resolution replaces every placeholder
with the root of the referenced document, recursively, so the result is
a single in-memory tree.

Algorithm:
1. Fetch and parse the entry document
2. For each child, in document order and concurrently across siblings:
   a. Reference: resolve the referenced document and splice its root in
   b. Otherwise: descend into the child's own children
3. Place results by original index so document order survives
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar
from urllib.parse import quote, urljoin

from universe.config import settings
from universe.exceptions import CycleError, DuplicateIdError, FetchError
from universe.loading.fetcher import DocumentSource
from universe.models import TopicNode
from universe.navigation.locator import find_duplicate_ids

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def gather_ordered(aws: list[Awaitable[T]]) -> list[T]:
    """Await all in parallel, keeping input order.

    The first failure propagates and every task still in flight is
    cancelled before it is re-raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class DocumentResolver:
    """Resolves a multi-document universe into a single tree."""

    def __init__(
        self,
        fetcher: DocumentSource,
        reference_suffix: str | None = None,
        reference_base_url: str | None = None,
        reject_duplicate_ids: bool | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.reference_suffix = reference_suffix or settings.reference_suffix
        self.reference_base_url = reference_base_url or settings.reference_base_url
        self.reject_duplicate_ids = (
            settings.reject_duplicate_ids
            if reject_duplicate_ids is None
            else reject_duplicate_ids
        )

    def reference_url(self, document_url: str, reference_id: str) -> str:
        """URL of the document a placeholder id refers to.

        The id is a file name, so characters with URL meaning (":", "#",
        "?", spaces, non-ASCII) are percent-encoded before joining.
        """
        name = quote(reference_id)
        if self.reference_base_url:
            return urljoin(self.reference_base_url.rstrip("/") + "/", name)
        return urljoin(document_url, name)

    async def resolve(self, entry_url: str) -> TopicNode:
        """
        Resolve the document at entry_url and everything it references.

        Args:
            entry_url: URL (or data-relative path) of the root document

        Returns:
            Root of the unified tree

        Raises:
            FetchError: A document could not be fetched or parsed
            CycleError: A document references itself, directly or indirectly
            DuplicateIdError: Duplicate ids found and reject_duplicate_ids is set
        """
        logger.info(f"Resolving universe from {entry_url}")

        root = await self._resolve_document(entry_url, chain=())

        duplicates = find_duplicate_ids(root)
        if duplicates:
            if self.reject_duplicate_ids:
                raise DuplicateIdError(duplicates)
            logger.warning(
                f"Duplicate node ids shadowed by first occurrence: {', '.join(duplicates)}"
            )

        logger.info(f"Resolved universe '{root.id}' from {entry_url}")
        return root

    async def _resolve_document(self, url: str, chain: tuple[str, ...]) -> TopicNode:
        """Fetch one document and resolve its subtree."""
        if url in chain:
            raise CycleError([*chain, url])
        chain = (*chain, url)

        data = await self.fetcher.get(url)
        try:
            root = TopicNode.from_dict(data, self.reference_suffix)
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError(url, f"malformed document: {e}") from e
        if root.is_reference(self.reference_suffix):
            raise FetchError(url, "document root is itself a reference")

        logger.debug(f"Parsed document {url} (root '{root.id}')")
        await self._resolve_children(root, url, chain)
        return root

    async def _resolve_children(
        self,
        node: TopicNode,
        document_url: str,
        chain: tuple[str, ...],
    ) -> None:
        """Replace reference placeholders below node, preserving child order."""
        if not node.children:
            return

        node.children = await gather_ordered(
            [self._resolve_child(child, document_url, chain) for child in node.children]
        )

    async def _resolve_child(
        self,
        child: TopicNode,
        document_url: str,
        chain: tuple[str, ...],
    ) -> TopicNode:
        if child.is_reference(self.reference_suffix):
            child_url = self.reference_url(document_url, child.id)
            return await self._resolve_document(child_url, chain)

        await self._resolve_children(child, document_url, chain)
        return child
