"""Shared pytest fixtures for the SUBSIFT test suite."""

from __future__ import annotations

from typing import Any, Dict, List

import aiohttp
import pytest

from subsift.core.config import Config, GeneralConfig


def ok(body: str, status: int = 200) -> Dict[str, Any]:
    """Build a response dict as returned by ``AsyncHTTPClient.get``."""
    return {"status": status, "headers": {}, "body": body, "url": ""}


def unreadable(error: str = "payload truncated") -> Dict[str, Any]:
    """Build a response dict whose body could not be read."""
    return {"status": 200, "headers": {}, "body": None, "url": "", "error": error}


class FakeHTTPClient:
    """Stand-in for ``AsyncHTTPClient`` that replays scripted outcomes per URL.

    Each outcome is either a response dict or an exception to raise. A URL
    with no outcomes left raises a connection error.
    """

    def __init__(self, routes: Dict[str, List[Any]]) -> None:
        self.routes = {url: list(outcomes) for url, outcomes in routes.items()}
        self.calls: List[str] = []
        self.opened = 0
        self.closed = 0

    def __call__(self, **kwargs: Any) -> "FakeHTTPClient":
        return self

    async def __aenter__(self) -> "FakeHTTPClient":
        self.opened += 1
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.closed += 1

    async def get(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        self.calls.append(url)
        outcomes = self.routes.get(url) or []
        if not outcomes:
            raise aiohttp.ClientConnectionError(f"no route for {url}")
        outcome = outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fast_config() -> Config:
    """Return a default Config with no pause between attempts."""
    return Config(general=GeneralConfig(retry_delay=0.0))


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch):
    """Install a :class:`FakeHTTPClient` for every source; returns a factory."""

    def install(routes: Dict[str, List[Any]]) -> FakeHTTPClient:
        client = FakeHTTPClient(routes)
        monkeypatch.setattr(
            "subsift.modules.subdomains.sources.base.AsyncHTTPClient", client
        )
        return client

    return install
