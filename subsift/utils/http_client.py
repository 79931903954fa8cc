"""Async HTTP client for SUBSIFT.

Provides :class:`AsyncHTTPClient` — a thin aiohttp wrapper with User-Agent
rotation, proxy support and an optional total timeout. Retrying is left to
the caller so each data source can apply its own attempt budget.
"""

from __future__ import annotations

import random
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

import aiohttp
from aiohttp import ClientSession, ClientTimeout, TCPConnector

from subsift.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENTS: List[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/121.0",
]


class AsyncHTTPClient:
    """Async HTTP client with User-Agent rotation.

    Usage::

        async with AsyncHTTPClient() as client:
            resp = await client.get("https://example.com")
            print(resp["status"], resp["body"][:200])

    Transport failures propagate as :class:`aiohttp.ClientError` or
    :class:`asyncio.TimeoutError`. A response whose body cannot be read is
    still returned, with ``body`` set to ``None`` and the failure described
    under the ``error`` key.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agents: Optional[List[str]] = None,
        proxy: Optional[str] = None,
        verify_ssl: bool = True,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Initialise the client (does *not* open a session yet).

        Args:
            timeout: Total request timeout in seconds, ``None`` to wait
                     indefinitely.
            user_agents: Pool of User-Agent strings to rotate.
            proxy: Optional HTTP proxy URL.
            verify_ssl: Whether to verify TLS certificates.
            headers: Additional default headers sent with every request.
        """
        self._timeout = timeout
        self._user_agents = user_agents or DEFAULT_USER_AGENTS
        self._proxy = proxy
        self._verify_ssl = verify_ssl
        self._default_headers: Dict[str, str] = headers or {}
        self._session: Optional[ClientSession] = None

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "AsyncHTTPClient":
        await self._create_session()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def _create_session(self) -> None:
        """Create the underlying :class:`aiohttp.ClientSession`."""
        connector = TCPConnector(ssl=self._verify_ssl)
        self._session = ClientSession(
            connector=connector,
            timeout=ClientTimeout(total=self._timeout),
            headers=self._default_headers,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session and release connections."""
        if self._session and not self._session.closed:
            await self._session.close()

    # ------------------------------------------------------------------
    # Public HTTP methods
    # ------------------------------------------------------------------

    async def get(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        """Perform an HTTP GET request.

        Args:
            url: Target URL.
            **kwargs: Extra arguments forwarded to :meth:`_request`.

        Returns:
            Response dict with ``status``, ``headers``, ``body``, ``url``.
        """
        return await self._request("GET", url, **kwargs)

    # ------------------------------------------------------------------
    # Core request logic
    # ------------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        """Execute a single HTTP request and read its body.

        Args:
            method: HTTP method string.
            url: Target URL.
            **kwargs: Forwarded to :meth:`aiohttp.ClientSession.request`.

        Returns:
            Response dict.

        Raises:
            aiohttp.ClientError: When the request could not be sent or no
                response headers were received.
        """
        if self._session is None:
            await self._create_session()

        kwargs.setdefault("headers", {})
        kwargs["headers"]["User-Agent"] = random.choice(self._user_agents)

        if self._proxy:
            kwargs["proxy"] = self._proxy

        assert self._session is not None
        async with self._session.request(method, url, **kwargs) as resp:
            response: Dict[str, Any] = {
                "status": resp.status,
                "headers": dict(resp.headers),
                "body": None,
                "url": str(resp.url),
            }
            try:
                response["body"] = await resp.text(errors="replace")
            except (aiohttp.ClientError, UnicodeDecodeError, LookupError) as exc:
                logger.debug("Failed to read body from %s: %s", url, exc)
                response["error"] = str(exc) or exc.__class__.__name__
            return response
