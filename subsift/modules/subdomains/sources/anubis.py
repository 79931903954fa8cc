"""AnubisDB subdomain source."""

from __future__ import annotations

import re
from typing import List

from subsift.modules.subdomains.sources.base import SubdomainSource

# One host-like token: no path separator, whitespace, quoting or list
# punctuation, so names packed into a JSON array come out one by one.
_TOKEN = r"[^/\s\"'<>,\[\]]+"

HOST_RE = re.compile(rf"https?://{_TOKEN}|www\.{_TOKEN}|{_TOKEN}\.com")


def extract_hosts(body: str) -> List[str]:
    """Return every URL origin or host-like token in *body*, in order.

    Args:
        body: Free text to scan.

    Returns:
        Matched substrings, e.g. ``https://foo.example.com`` or
        ``www.bar.com``.
    """
    return HOST_RE.findall(body)


class AnubisSource(SubdomainSource):
    """Discover subdomains via the AnubisDB (jldc.me) API.

    The response is scanned as plain text, so any body (even an error page)
    counts as a successful attempt.
    """

    name = "anubis"
    description = "AnubisDB subdomain lookup (jldc.me)"

    def build_url(self, domain: str) -> str:
        return f"https://jldc.me/anubis/subdomains/{domain}"

    def parse(self, body: str) -> List[str]:
        return extract_hosts(body)
