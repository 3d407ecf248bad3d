"""
Core percentage normalization.

Responsibilities:
- ranking weights (size and repository-count exponents)
- percentage calculation with two decimals
- sum preservation (always 100.00)
- minor languages never displayed as 0%
"""

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional

from .models import LanguageShare, LanguageTotal
from .rules import DEFAULT_COUNT_WEIGHT, DEFAULT_SIZE_WEIGHT

# all arithmetic below is done in hundredths of a percent
SCALE = 100
FULL = 100 * SCALE


class EmptyDistribution(ValueError):
    """Raised when there is no positive size left to distribute."""


def weighted_size(
    size: float,
    count: float,
    size_weight: float = DEFAULT_SIZE_WEIGHT,
    count_weight: float = DEFAULT_COUNT_WEIGHT,
) -> float:
    if size_weight < 0 or count_weight < 0:
        raise ValueError("Weight exponents must be non-negative")
    return math.pow(size, size_weight) * math.pow(count, count_weight)


def apply_weights(
    totals: Mapping[str, LanguageTotal],
    size_weight: float = DEFAULT_SIZE_WEIGHT,
    count_weight: float = DEFAULT_COUNT_WEIGHT,
) -> Dict[str, float]:
    """
    Turn per-language totals into ranking weights.

    Entries whose weighted size is not positive are dropped, which keeps a
    zero-byte language out even when size_weight is 0.
    """
    weighted: Dict[str, float] = {}
    for name, total in totals.items():
        if total.size <= 0:
            continue
        value = weighted_size(total.size, total.count, size_weight, count_weight)
        if value > 0:
            weighted[name] = value
    return weighted


def _ceil_hundredths(percentage: float) -> int:
    # 14.000000000000002% must stay 14.00, not become 14.01, but a positive
    # share never drops below 0.01
    return max(1, math.ceil(round(percentage * SCALE, 9)))


def normalize_distribution(
    sizes: Mapping[str, float],
    order_by: Optional[Mapping[str, float]] = None,
) -> List[LanguageShare]:
    """
    Convert sizes into two-decimal percentages summing to exactly 100.

    Rules:
    - Sizes <= 0 are ignored; nothing left raises EmptyDistribution.
    - Every percentage starts at its ceiling to 0.01, so no positive share
      rounds away to 0.00.
    - The resulting excess is removed 0.01 at a time, largest true share
      first, one step per entry per pass. An entry already at 0.01 is
      skipped. Another pass only happens when more excess remains than
      there were entries able to give (many languages sitting at 0.01).
    - A shortfall (only reachable through float noise) is filled the same way.
    - Output is ordered by descending order_by size (defaults to sizes),
      ties keep input order. The reported size comes from order_by too.
    """
    order_by = sizes if order_by is None else order_by

    entries = [(name, float(size)) for name, size in sizes.items() if size > 0]
    total = sum(size for _, size in entries)
    if not entries or total <= 0:
        raise EmptyDistribution("No language data to distribute")

    raw = {name: size / total * 100 for name, size in entries}
    hundredths = {name: _ceil_hundredths(pct) for name, pct in raw.items()}

    excess = sum(hundredths.values()) - FULL
    # sorted() is stable, so equal shares keep input order
    by_share = sorted(raw, key=lambda n: raw[n], reverse=True)
    while excess != 0:
        before = excess
        for name in by_share:
            if excess == 0:
                break
            if excess > 0:
                if hundredths[name] > 1:
                    hundredths[name] -= 1
                    excess -= 1
            else:
                hundredths[name] += 1
                excess += 1
        if excess == before:
            # every entry is already at 0.01
            break

    names = [name for name, _ in entries if hundredths[name] > 0]
    names.sort(key=lambda n: order_by.get(n, 0), reverse=True)

    return [
        LanguageShare(
            language=name,
            size=order_by.get(name, 0),
            percentage=hundredths[name] / SCALE,
        )
        for name in names
    ]


def normalize_languages(
    totals: Mapping[str, LanguageTotal],
    size_weight: float = DEFAULT_SIZE_WEIGHT,
    count_weight: float = DEFAULT_COUNT_WEIGHT,
) -> List[LanguageShare]:
    """Weight the totals, then normalize; output is ordered by raw byte size."""
    weighted = apply_weights(totals, size_weight, count_weight)
    raw_sizes = {name: totals[name].size for name in weighted}
    return normalize_distribution(weighted, order_by=raw_sizes)
