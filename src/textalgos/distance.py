"""Edit-distance helpers for reconciling scraped labels."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .config import Config

logger = logging.getLogger("textalgos.distance")


@dataclass(frozen=True)
class StringPair:
    key: str
    value: str


@dataclass(frozen=True)
class MatchResult:
    """Closest candidate found by best_match (distance 0 = exact)."""

    distance: int
    text: str


PairLike = Union[StringPair, Tuple[str, str]]


def levenshtein_distance(s: str, t: str) -> int:
    """Return the Levenshtein distance between two strings.

    Unit cost for insertion, deletion and substitution.
    """
    rows = len(s) + 1
    cols = len(t) + 1
    d = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        d[i][0] = i
    for j in range(cols):
        d[0][j] = j

    for j in range(1, cols):
        for i in range(1, rows):
            cost = 0 if s[i - 1] == t[j - 1] else 1
            d[i][j] = min(
                d[i - 1][j] + 1,  # deletion
                d[i][j - 1] + 1,  # insertion
                d[i - 1][j - 1] + cost,  # substitution
            )

    return d[-1][-1]


def best_match(
    target: str,
    candidates: Iterable[Optional[str]] | None,
    max_distance: int | None = None,
    config: Config | None = None,
) -> MatchResult | None:
    """Return the candidate closest to ``target``.

    Empty and None candidates are skipped. Ties keep the first candidate seen.
    Returns None when nothing usable remains or the best distance exceeds
    ``max_distance`` (taken from ``config.match_max_distance`` when omitted).
    """
    if candidates is None:
        raise ValueError("candidates must be an iterable of strings, not None")
    if max_distance is None and config is not None:
        max_distance = config.match_max_distance
    if max_distance is not None and max_distance < 0:
        raise ValueError("max_distance must be >= 0")

    best: MatchResult | None = None
    for candidate in candidates:
        if not candidate:
            continue
        distance = levenshtein_distance(target, candidate)
        if best is None or distance < best.distance:
            best = MatchResult(distance=distance, text=candidate)
            if distance == 0:
                break

    if best is not None and max_distance is not None and best.distance > max_distance:
        return None
    return best


def rank_matches(
    target: str,
    candidates: Iterable[Optional[str]] | None,
    limit: int | None = None,
) -> list[MatchResult]:
    """Score every usable candidate, closest first (stable for ties)."""
    if candidates is None:
        raise ValueError("candidates must be an iterable of strings, not None")
    results = [
        MatchResult(distance=levenshtein_distance(target, candidate), text=candidate)
        for candidate in candidates
        if candidate
    ]
    results.sort(key=lambda item: item.distance)
    if limit is not None:
        return results[:limit]
    return results


def is_better_swapped(pair_a: PairLike, pair_b: PairLike) -> bool:
    """Return True if the pairs match better with key and value swapped.

    Compares ``d(a.key, b.key) + d(a.value, b.value)`` against
    ``d(a.key, b.value) + d(a.value, b.key)``; ties count as not swapped.
    """
    key_a, value_a = _unpack(pair_a)
    key_b, value_b = _unpack(pair_b)

    distance_kk = levenshtein_distance(key_a, key_b)
    distance_vv = levenshtein_distance(value_a, value_b)
    straight = distance_kk + distance_vv

    distance_kv = levenshtein_distance(key_a, value_b)
    distance_vk = levenshtein_distance(value_a, key_b)
    swapped = distance_kv + distance_vk

    logger.debug("Distance %r ~ %r = %s", key_a, key_b, distance_kk)
    logger.debug("Distance %r ~ %r = %s", value_a, value_b, distance_vv)
    logger.debug("(Swapped) distance %r ~ %r = %s", key_a, value_b, distance_kv)
    logger.debug("(Swapped) distance %r ~ %r = %s", value_a, key_b, distance_vk)
    logger.debug("Sum straight=%s swapped=%s", straight, swapped)

    return swapped < straight


def _unpack(pair: PairLike) -> tuple[str, str]:
    if isinstance(pair, StringPair):
        return pair.key, pair.value
    key, value = pair
    return key, value
