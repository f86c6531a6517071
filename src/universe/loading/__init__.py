"""Document loading: fetching and cross-document resolution."""

from universe.loading.fetcher import DocumentFetcher, DocumentSource, is_remote
from universe.loading.resolver import DocumentResolver, gather_ordered

__all__ = [
    "DocumentFetcher",
    "DocumentSource",
    "DocumentResolver",
    "gather_ordered",
    "is_remote",
]
