import asyncio
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from leaguedata.config.settings import settings


class LeagueDataError(Exception):
    """Base exception for league data errors."""

    pass


class FetchError(LeagueDataError):
    """A resource was unreachable or answered with a non-success status."""

    pass


class ConfigurationError(LeagueDataError):
    """The master registry has no complete row for the requested league."""

    pass


class ParseError(LeagueDataError):
    """Reserved: the tabular parser is lenient and never raises this."""

    pass


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https")


def local_path(location: str) -> Path:
    """Filesystem path of a ``file://`` URL or a plain path."""
    parsed = urlparse(location)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(location)


class ResourceFetcher:
    """Fetches the raw text of a tabular resource (published sheet or local file).

    Each fetch is independently awaitable. No timeout is imposed beyond the
    one configured on the HTTP client, which callers may supply themselves.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        max_attempts: Optional[int] = None,
    ):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout_seconds),
            follow_redirects=True,
        )
        self.max_attempts = max_attempts or settings.fetch_max_attempts

    async def fetch_text(self, location: str) -> str:
        """Returns the resource's text or raises FetchError."""
        location = str(location or "").strip()
        if not location:
            raise FetchError("Empty resource location")
        if is_remote(location):
            return await self._fetch_remote(location)
        return await self._read_local(location)

    async def _read_local(self, location: str) -> str:
        path = local_path(location)
        logger.debug(f"Reading local resource {path}")
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"Cannot read {path}: {e}") from e

    async def _fetch_remote(self, url: str) -> str:
        logger.debug(f"Fetching {url}")
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=1, min=1, max=10),
                retry=retry_if_exception_type(httpx.RequestError),
                reraise=True,
            ):
                with attempt:
                    response = await self.client.get(url)
        except httpx.RequestError as e:
            logger.warning(f"Request error fetching {url}: {e}")
            raise FetchError(f"Request failed for {url}: {e}") from e

        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} while fetching {url}")
            raise FetchError(f"HTTP {response.status_code} while fetching {url}")

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response.text

    async def close(self):
        """Closes the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.client.aclose()
            logger.debug("Closed resource fetcher HTTP client")

    async def __aenter__(self) -> "ResourceFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
