"""Utility functions for SUBSIFT.

Helpers for name normalisation and order-preserving deduplication of
enumerated subdomains.
"""

from __future__ import annotations

from typing import Iterable, List, TypeVar

T = TypeVar("T")

WILDCARD_PREFIX = "*."

# U+115A (HANGUL CHOSEONG KIYEOK-TIKEUT, UTF-8 ``E1 85 9A``) repeated 29 times.
# Some crt.sh ``name_value`` fields carry this run of filler characters from a
# mis-encoded certificate subject; it is never part of a real hostname.
JUNK_SEQUENCE = "\u115a" * 29


def normalise_name(name: str) -> str:
    """Clean a raw subdomain name taken from an upstream source.

    Only the first ``*.`` is removed, wherever it occurs, so
    ``"*.*.example.com"`` becomes ``"*.example.com"``; later wildcards are
    kept. Every occurrence of :data:`JUNK_SEQUENCE` is removed. An empty
    result is returned as-is.

    Args:
        name: Raw name string.

    Returns:
        Cleaned name string.
    """
    name = name.replace(WILDCARD_PREFIX, "", 1)
    return name.replace(JUNK_SEQUENCE, "")


def deduplicate(items: Iterable[T]) -> List[T]:
    """Return a list with duplicates removed while preserving insertion order.

    Args:
        items: Any iterable of hashable items.

    Returns:
        Ordered unique list.
    """
    seen: set = set()
    result: List[T] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
