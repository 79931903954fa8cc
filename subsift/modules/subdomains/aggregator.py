"""Subdomain aggregator module — merges results from all enumeration sources."""

from __future__ import annotations

from typing import Dict, List

from subsift.core.config import Config
from subsift.modules.subdomains.sources import AnubisSource, CrtShSource, SubdomainSource
from subsift.utils.helpers import deduplicate, normalise_name
from subsift.utils.logger import get_logger

logger = get_logger(__name__)


def _build_sources(config: Config) -> List[SubdomainSource]:
    """Instantiate the enabled sources in query order (AnubisDB, then crt.sh)."""
    sources: List[SubdomainSource] = []
    if config.sources.anubis:
        sources.append(AnubisSource(config.general))
    if config.sources.crtsh:
        sources.append(CrtShSource(config.general))
    return sources


class SubdomainAggregator:
    """Query every enabled source one after the other and merge the names.

    Sources run strictly in sequence; the next one starts only when the
    previous one has finished all of its attempts.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.sources = _build_sources(config)

    async def collect(self, domain: str) -> Dict[str, List[str]]:
        """Return the names found by each source, keyed by source name.

        Sources whose :meth:`parse` does not normalise are passed through
        :func:`normalise_name` only when ``sources.normalize_all`` is set.
        """
        found: Dict[str, List[str]] = {}
        for source in self.sources:
            logger.debug("Querying %s for %s", source.name, domain)
            names = await source.fetch_safe(domain)
            if self.config.sources.normalize_all and not source.normalises:
                names = [normalise_name(n) for n in names]
            found[source.name] = names
        return found

    @staticmethod
    def merge(found: Dict[str, List[str]]) -> List[str]:
        """Concatenate per-source lists in query order and drop repeats."""
        merged: List[str] = []
        for names in found.values():
            merged.extend(names)
        return deduplicate(merged)
