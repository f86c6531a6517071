"""Document fetcher for universe JSON documents.

Remote documents (http/https URLs) are fetched with a pooled requests
session; anything else is read from the local data directory. Both paths
run in worker threads so the event loop is never blocked.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import unquote, urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from universe.config import settings
from universe.exceptions import FetchError

logger = logging.getLogger(__name__)

LOCAL_URL_PREFIX = "/data/"


class DocumentSource(Protocol):
    """Anything that can load a JSON document by URL."""

    async def get(self, url: str) -> dict[str, Any]: ...


def is_remote(url: str) -> bool:
    return urlparse(url).scheme in ("http", "https")


class DocumentFetcher:
    """Async-wrapped document loader using requests and the local filesystem."""

    def __init__(
        self,
        data_dir: str | Path | None = None,
        timeout: float | None = None,
        max_concurrent: int | None = None,
        retries: int | None = None,
    ) -> None:
        self.data_dir = Path(data_dir or settings.data_dir)
        self.timeout = timeout or settings.fetch_timeout
        self.max_concurrent = max_concurrent or settings.fetch_max_concurrent
        self.retries = settings.fetch_retries if retries is None else retries

        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self._session: requests.Session | None = None

    def _get_session(self) -> requests.Session:
        """Get or create requests session with connection pooling."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
            adapter = HTTPAdapter(
                pool_connections=self.max_concurrent,
                pool_maxsize=self.max_concurrent * 2,
                max_retries=Retry(total=self.retries, backoff_factor=0.5),
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def local_path(self, url: str) -> Path:
        """Map a site-relative document URL onto the data directory."""
        relative = unquote(url)
        if relative.startswith(LOCAL_URL_PREFIX):
            relative = relative[len(LOCAL_URL_PREFIX):]
        relative = relative.lstrip("/")

        root = self.data_dir.resolve()
        path = (root / relative).resolve()
        if not path.is_relative_to(root):
            raise FetchError(url, "path escapes the data directory")
        return path

    def _sync_get_remote(self, url: str) -> Any:
        """Synchronous HTTP fetch (runs in thread)."""
        session = self._get_session()
        response = session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _sync_get_local(self, url: str) -> Any:
        """Synchronous file read (runs in thread)."""
        path = self.local_path(url)
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    async def get(self, url: str) -> dict[str, Any]:
        """Fetch and parse one document."""
        async with self._semaphore:
            try:
                if is_remote(url):
                    data = await asyncio.to_thread(self._sync_get_remote, url)
                else:
                    data = await asyncio.to_thread(self._sync_get_local, url)

            except requests.HTTPError as e:
                logger.error(f"Document fetch error: {e.response.status_code} - {url}")
                raise FetchError(url, f"HTTP {e.response.status_code}") from e
            except requests.RequestException as e:
                logger.error(f"Document request failed: {url}: {e}")
                raise FetchError(url, str(e)) from e
            except OSError as e:
                logger.error(f"Document read failed: {url}: {e}")
                raise FetchError(url, str(e)) from e
            except ValueError as e:
                # json.JSONDecodeError and requests' JSON errors are ValueErrors
                logger.error(f"Document is not valid JSON: {url}: {e}")
                raise FetchError(url, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FetchError(url, f"expected a JSON object, got {type(data).__name__}")

        logger.debug(f"Fetched document {url}")
        return data
