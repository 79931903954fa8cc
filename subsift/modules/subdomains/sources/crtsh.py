"""crt.sh — Certificate Transparency log source."""

from __future__ import annotations

import json
from typing import Any, Iterable, List

from subsift.modules.subdomains.sources.base import SubdomainSource
from subsift.utils.helpers import normalise_name


def extract_name_values(records: Iterable[Any]) -> List[str]:
    """Project crt.sh records onto their normalised ``name_value`` strings.

    ``null`` records, and records whose ``name_value`` is missing or not a
    string, are skipped.

    Args:
        records: Decoded crt.sh JSON array.

    Returns:
        Normalised names in record order.

    Raises:
        ValueError: If a record is neither an object nor ``null``.
    """
    names: List[str] = []
    for index, entry in enumerate(records):
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise ValueError(f"record {index} is {type(entry).__name__}, expected an object")
        value = entry.get("name_value")
        if isinstance(value, str):
            names.append(normalise_name(value))
    return names


class CrtShSource(SubdomainSource):
    """Fetch subdomains from crt.sh certificate transparency logs.

    Uses the public JSON API — no API key required.
    """

    name = "crt.sh"
    normalises = True
    description = "Certificate Transparency logs via crt.sh"

    def build_url(self, domain: str) -> str:
        return f"https://crt.sh/?q=%25.{domain}&output=json"

    def parse(self, body: str) -> List[str]:
        """Decode a crt.sh JSON body.

        Raises:
            ValueError: If *body* is not JSON, not a JSON array, or holds a
                record that is neither an object nor ``null``.
        """
        data = json.loads(body)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        return extract_name_values(data)
