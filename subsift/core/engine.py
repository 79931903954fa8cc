"""Enumeration orchestrator for SUBSIFT.

The :class:`EnumerationEngine` prepares the output location, queries every
enabled source in turn, merges the names and writes them out.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from subsift.core.config import Config, load_config
from subsift.modules.subdomains.aggregator import SubdomainAggregator
from subsift.reporting.text_report import TextReporter
from subsift.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class EnumerationResult:
    """Outcome of a complete enumeration run.

    Attributes:
        domain: The enumerated root domain.
        output_path: File the subdomains were written to.
        started_at: Unix timestamp when the run began.
        finished_at: Unix timestamp when the run ended (or ``None``).
        sources: Names returned by each source, keyed by source name.
        subdomains: Merged, deduplicated names in output order.
    """

    domain: str
    output_path: str
    started_at: float
    finished_at: Optional[float] = None
    sources: Dict[str, List[str]] = field(default_factory=dict)
    subdomains: List[str] = field(default_factory=list)

    @property
    def duration(self) -> float:
        """Elapsed run time in seconds."""
        if self.finished_at is None:
            return time.time() - self.started_at
        return self.finished_at - self.started_at


class EnumerationEngine:
    """Runs one enumeration of *domain* into *output_path*.

    Example::

        engine = EnumerationEngine("example.com", "out/subs.txt")
        result = await engine.run()
        print(len(result.subdomains))
    """

    def __init__(
        self,
        domain: str,
        output_path: str,
        config: Optional[Config] = None,
        config_path: Optional[str] = None,
    ) -> None:
        self.domain = domain
        self.output_path = output_path
        self.config: Config = config or load_config(config_path)
        self.reporter = TextReporter()

    async def run(self) -> EnumerationResult:
        """Execute the enumeration and write the output file.

        The output directory is created before any request is sent, so an
        unusable path fails fast.

        Returns:
            :class:`EnumerationResult` for the run.

        Raises:
            OSError: If the output directory or file cannot be created.
        """
        result = EnumerationResult(
            domain=self.domain,
            output_path=self.output_path,
            started_at=time.time(),
        )
        self.reporter.prepare(self.output_path)

        aggregator = SubdomainAggregator(self.config)
        result.sources = await aggregator.collect(self.domain)
        result.subdomains = aggregator.merge(result.sources)

        self.reporter.generate(result.subdomains, self.output_path)
        result.finished_at = time.time()
        logger.info(
            "Wrote %d unique subdomain(s) for %s to %s",
            len(result.subdomains),
            self.domain,
            self.output_path,
        )
        return result
