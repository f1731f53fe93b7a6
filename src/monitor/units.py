"""Size-string normalisation for constraint comparison.

Sizes are scaled to kilobytes: ``KB`` is the base unit, ``MB`` is 1024 and
``GB`` is 1024². Readings and limits go through the same scale, so only the
relative comparison matters.
"""

from __future__ import annotations

import math
import re

_SIZE_RE = re.compile(r"(\d+(?:[.,]\d+)?)\s*([KMG])B?", re.IGNORECASE)

_MULTIPLIERS: dict[str, int] = {
    "K": 1,
    "M": 1024,
    "G": 1024 * 1024,
}


def parse_size(text: str) -> float:
    """Parse ``"1.5GB"`` / ``"512M"`` into kilobytes.

    Returns ``math.nan`` when *text* has no recognisable size; NaN compares
    false against everything, so it can never produce a violation.
    """
    match = _SIZE_RE.search(str(text))
    if match is None:
        return math.nan
    # Some locales print a decimal comma.
    number = float(match.group(1).replace(",", "."))
    return number * _MULTIPLIERS[match.group(2).upper()]


def is_comparable(value: float) -> bool:
    return not math.isnan(value)
