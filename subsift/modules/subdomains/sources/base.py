"""Base class for all subdomain enumeration sources.

Every source module must inherit from :class:`SubdomainSource`, build its
query URL in :meth:`~SubdomainSource.build_url` and turn a response body into
names in :meth:`~SubdomainSource.parse`. The base class owns the fetch loop:
a fixed number of attempts with a fixed pause after each transport error.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional

import aiohttp

from subsift.core.config import GeneralConfig
from subsift.utils.http_client import AsyncHTTPClient
from subsift.utils.logger import get_logger


class SubdomainSource(ABC):
    """Abstract base class for a single subdomain enumeration source.

    Attributes:
        name: Human-readable source identifier (e.g. ``"crt.sh"``).
        description: One-line description of what this source does.
        normalises: Whether :meth:`parse` already applies
            :func:`~subsift.utils.helpers.normalise_name` to its output.
    """

    name: str = "unknown"
    description: str = ""
    normalises: bool = False

    def __init__(self, config: Optional[GeneralConfig] = None) -> None:
        self.config = config or GeneralConfig()
        self.logger = get_logger(f"source.{self.name}")

    @abstractmethod
    def build_url(self, domain: str) -> str:
        """Return the query URL for *domain*."""

    @abstractmethod
    def parse(self, body: str) -> List[str]:
        """Extract subdomain names from a response body.

        Args:
            body: Decoded response text.

        Returns:
            Names in order of appearance.

        Raises:
            ValueError: If the body is not in the expected format. The
                attempt is then counted as failed.
        """

    def _client(self) -> AsyncHTTPClient:
        return AsyncHTTPClient(
            timeout=self.config.timeout,
            user_agents=self.config.user_agents,
            proxy=self.config.proxy,
            verify_ssl=self.config.verify_ssl,
        )

    async def fetch(self, domain: str) -> List[str]:
        """Discover subdomains for *domain*.

        Up to ``config.retries`` attempts are made. A request error is
        followed by a ``config.retry_delay`` pause; an unreadable or
        unparsable body moves straight on to the next attempt. Only the data
        of the first successful attempt is returned.

        Args:
            domain: The root domain to enumerate (e.g. ``"example.com"``).

        Returns:
            List of discovered names, empty when every attempt failed.
        """
        url = self.build_url(domain)
        attempts = self.config.retries
        async with self._client() as client:
            for attempt in range(1, attempts + 1):
                try:
                    resp = await client.get(url)
                except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                    self.logger.warning(
                        "Error getting %s subdomains (attempt %d/%d): %s",
                        self.name, attempt, attempts, str(exc) or exc.__class__.__name__,
                    )
                    await asyncio.sleep(self.config.retry_delay)
                    continue

                if resp.get("error"):
                    self.logger.warning(
                        "Error reading %s response (attempt %d/%d): %s",
                        self.name, attempt, attempts, resp["error"],
                    )
                    continue

                self.logger.debug("%s answered HTTP %s", self.name, resp["status"])
                try:
                    names = self.parse(resp["body"])
                except ValueError as exc:
                    self.logger.warning(
                        "Error parsing %s response (attempt %d/%d): %s",
                        self.name, attempt, attempts, exc,
                    )
                    continue

                self.logger.info("%s returned %d name(s) for %s", self.name, len(names), domain)
                return names

        self.logger.warning("%s gave no usable response for %s after %d attempt(s)", self.name, domain, attempts)
        return []

    async def fetch_safe(self, domain: str) -> List[str]:
        """Wrapper around :meth:`fetch` that never raises.

        Args:
            domain: Root domain to enumerate.

        Returns:
            List of names or empty list on any unexpected error.
        """
        try:
            return await self.fetch(domain)
        except Exception as exc:  # noqa: BLE001
            self.logger.error("Source '%s' error for %s: %s", self.name, domain, exc)
            return []

    def __repr__(self) -> str:
        return f"<SubdomainSource {self.name}>"
