"""
Numeric coercion for transaction amounts.

Amounts are never rejected.  Whatever a client sends, or whatever an
older deployment left in the collection, is read as a number, with
``0`` standing in for anything that does not parse.
"""

import math
import re
from typing import Any

# Longest leading decimal literal of a string, e.g. "12.5abc" -> "12.5".
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def coerce_amount(value: Any) -> float:
    """Convert ``value`` to a finite float, falling back to ``0``.

    Numbers are kept as they are.  Strings are parsed from their
    longest leading numeric prefix after leading whitespace, so
    ``"12.50 EUR"`` becomes ``12.5``.  Everything else (``None``,
    booleans, lists, empty or non-numeric strings, NaN, infinities)
    becomes ``0``.
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value.lstrip())
        if match is None:
            return 0.0
        number = float(match.group())
    else:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    # Normalizes -0.0 as well.
    return number or 0.0
