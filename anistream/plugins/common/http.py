"""
HTTP Client - Shared aiohttp plumbing for site adapters.

Adapters compose an HttpClient rather than inherit one. Every request is
a single attempt: failures surface as NetworkError and are not retried.
"""

import asyncio
import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urljoin, urlparse

import aiohttp

from anistream.core.exceptions import NetworkError


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
)


class HttpClient:
    """Lazily created aiohttp session with rate limiting and error mapping."""

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        rate_limit: float = 0.0,
    ):
        """
        Initialize the client.

        Args:
            base_url: Base URL relative request paths are resolved against
            timeout: Total request timeout in seconds
            user_agent: User agent sent with every request
            rate_limit: Minimum seconds between requests
        """
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.rate_limit = rate_limit
        self._session: Optional[aiohttp.ClientSession] = None
        self._last_request_time = 0.0

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session with proper configuration."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
                use_dns_cache=True
            )

            headers = {
                'User-Agent': self.user_agent,
                'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
                'Accept-Language': 'ru-RU,ru;q=0.9,en-US;q=0.8,en;q=0.5',
            }

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=headers
            )

        return self._session

    def absolute(self, url: str) -> str:
        """Resolve a URL against the base URL."""
        if not urlparse(url).netloc:
            return urljoin(self.base_url, url)
        return url

    async def _wait_rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        elapsed = time.monotonic() - self._last_request_time
        if elapsed < self.rate_limit:
            await asyncio.sleep(self.rate_limit - elapsed)
        self._last_request_time = time.monotonic()

    async def request_text(self, method: str, url: str, **kwargs: Any) -> str:
        """
        Perform a request and return the body as text.

        Raises:
            NetworkError: On HTTP errors, transport failures or a body that
                does not decode with the declared charset
        """
        await self._wait_rate_limit()
        url = self.absolute(url)
        logger.debug(f"Making {method} request to {url}")

        try:
            async with self.session.request(method, url, **kwargs) as response:
                body = await response.text()
                if response.status >= 400:
                    raise NetworkError(
                        f"HTTP {response.status} error for {url}",
                        url=url,
                        status_code=response.status,
                        details=body[:500]
                    )
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Request failed: {e}", url=url, details=str(e))
        except UnicodeDecodeError as e:
            raise NetworkError(f"Undecodable response body from {url}", url=url, details=str(e))

    async def get_text(self, url: str, **kwargs: Any) -> str:
        """Get text content from URL."""
        return await self.request_text('GET', url, **kwargs)

    async def post_text(
        self,
        url: str,
        data: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any
    ) -> str:
        """POST a form and return the body as text."""
        return await self.request_text('POST', url, data=data, headers=headers, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """
        Get JSON content from URL.

        Raises:
            NetworkError: On transport failure or a non-JSON body
        """
        body = await self.get_text(url, **kwargs)
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise NetworkError(f"Invalid JSON from {url}: {e}", url=url, details=body[:500])

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")
        self._session = None


__all__ = ["HttpClient", "DEFAULT_USER_AGENT"]
